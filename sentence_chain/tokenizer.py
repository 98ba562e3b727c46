"""
Splits raw text into sentences and sentences into normalized word tokens.

A token is a lowercase word with surrounding whitespace and all double-quote
characters removed. Tokens are never empty.
"""
import re

from . import config

_SENTENCE_SPLIT = re.compile(f"[{re.escape(config.SENTENCE_DELIMITERS)}]")


def split_sentences(text):
    """
    Splits text on '.', '?', '!' and newlines.

    Consecutive delimiters yield empty fragments; they are kept here and
    naturally produce no tokens in split_words.
    """
    return _SENTENCE_SPLIT.split(text)


def clean_word(word):
    """Normalizes a single space-separated piece. Returns '' if nothing is left."""
    return word.replace('"', '').strip().lower()


def split_words(sentence):
    """Splits a sentence on spaces into tokens, preserving order and dropping empty pieces."""
    words = []
    for piece in sentence.split(' '):
        token = clean_word(piece)
        if token:
            words.append(token)
    return words


def tokenize(text):
    """Yields the token list of every sentence in text that has at least one token."""
    for sentence in split_sentences(text):
        words = split_words(sentence)
        if words:
            yield words
