from .markov_chain import ChainModel, EmptyModelError, END, Link
from .generate import SentenceGenerator, sentence_words
from .collector import ConcurrentCollector, NoMatchFoundError, generate_sentences
