from .markov_chain import (
    END,
    ChainModel,
    ConcurrentCollector,
    EmptyModelError,
    Link,
    NoMatchFoundError,
    SentenceGenerator,
    generate_sentences,
)

__version__ = "0.1.0"
