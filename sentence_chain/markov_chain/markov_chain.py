from collections import defaultdict
from types import MappingProxyType
from typing import NamedTuple
import logging

from ..tokenizer import tokenize

logger = logging.getLogger(__name__)


class EmptyModelError(ValueError):
    """Raised when generating from a model that has no starting words."""

    def __init__(self, message="Model is empty. Build it from text with at least one word."):
        super().__init__(message)


class Link(NamedTuple):
    """
    What can follow a word: either the end of the sentence, or the next
    one to word_length tokens observed after it. END is the Link with no words.
    """
    words: tuple = ()

    @property
    def is_end(self):
        return not self.words

    @property
    def last_word(self):
        return self.words[-1]


END = Link()


class ChainModel:
    """
    A word transition table built once from source text.

    starting_words holds the first token of every sentence, duplicates
    included, so a uniform pick is frequency weighted. links maps every token
    to the Links observed after it, in observation order. Both are read-only
    after construction and safe to share between threads.
    """

    def __init__(self, text, word_length=1):
        if word_length < 1:
            raise ValueError(f"word_length must be at least 1, got {word_length}")
        self.word_length = word_length

        starting_words = []
        links = defaultdict(list)
        n_sentences = 0

        for words in tokenize(text):
            n_sentences += 1
            count = len(words)
            for i, word in enumerate(words):
                if i == 0:
                    starting_words.append(word)

                if i + 1 == count:
                    links[word].append(END)
                else:
                    # Never read past the sentence boundary.
                    end = min(i + word_length, count - 1)
                    links[word].append(Link(tuple(words[i + 1:end + 1])))

        self._starting_words = tuple(starting_words)
        self._links = {word: tuple(word_links) for word, word_links in links.items()}
        self._links_view = MappingProxyType(self._links)

        logger.debug(
            f"Built chain from {n_sentences} sentences: "
            f"{len(self._starting_words)} starting words, {len(self._links)} distinct words."
        )

    @classmethod
    def from_sources(cls, sources, word_length=1):
        """Builds a chain from several texts, e.g. file contents, joined by newlines."""
        return cls("\n".join(sources), word_length=word_length)

    @property
    def starting_words(self):
        return self._starting_words

    @property
    def links(self):
        return self._links_view

    @property
    def vocabulary(self):
        return frozenset(self._links)

    @property
    def is_empty(self):
        return not self._starting_words

    def links_for(self, word):
        """Returns the Links following word, or an empty tuple if it has none."""
        return self._links.get(word, ())

    def __eq__(self, other):
        if not isinstance(other, ChainModel):
            return NotImplemented
        return (
            self.word_length == other.word_length
            and self._starting_words == other._starting_words
            and self._links == other._links
        )

    __hash__ = None

    def __repr__(self):
        return (
            f"ChainModel(word_length={self.word_length}, "
            f"starting_words={len(self._starting_words)}, words={len(self._links)})"
        )
