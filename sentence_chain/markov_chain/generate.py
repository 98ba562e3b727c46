import random

from .markov_chain import EmptyModelError


def capitalize_first(word):
    return word[:1].upper() + word[1:]


def sentence_words(sentence):
    """
    Returns the set of lowercase words in a generated sentence.
    The terminating period is dropped so the last word compares like any other.
    """
    return set(sentence.lower().rstrip('.').split(' '))


class SentenceGenerator:
    """
    Produces sentences by random walks through a ChainModel.

    Every pick, starting word and link alike, is uniform over the candidate
    list. Pass a seeded random.Random for reproducible output. One generator
    should not be shared between threads; give each worker its own.
    """

    def __init__(self, model, rng=None, max_words=None):
        self.model = model
        self.rng = rng if rng is not None else random.Random()
        self.max_words = max_words or None

    def generate(self):
        if self.model.is_empty:
            raise EmptyModelError()

        previous_word = self.rng.choice(self.model.starting_words)
        parts = [capitalize_first(previous_word)]
        n_words = 1

        while True:
            if self.max_words is not None and n_words >= self.max_words:
                break

            word_links = self.model.links_for(previous_word)
            # A word with no links ends the sentence just like END does.
            if not word_links:
                break

            link = self.rng.choice(word_links)
            if link.is_end:
                break

            parts.append(' '.join(link.words))
            n_words += len(link.words)
            previous_word = link.last_word

        return ' '.join(parts) + '.'
