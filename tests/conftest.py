import pytest

from sentence_chain.markov_chain import END


@pytest.fixture
def follows_links():
    """
    Returns a checker that a generated sentence is a walk through the model:
    it opens with a starting word, every continuation is a real Link of the
    word before it, and it stops at END or at a word with no links.
    """

    def check(model, sentence):
        assert sentence.endswith(".")
        words = sentence[:-1].lower().split(" ")

        def walk(previous, i):
            word_links = model.links_for(previous)
            if i == len(words):
                return not word_links or END in word_links
            return any(
                not link.is_end
                and tuple(words[i:i + len(link.words)]) == link.words
                and walk(link.last_word, i + len(link.words))
                for link in word_links
            )

        return words[0] in model.starting_words and walk(words[0], 1)

    return check
