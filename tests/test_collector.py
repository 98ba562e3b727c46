import random
import threading

import pytest

from sentence_chain import config
from sentence_chain.markov_chain import collector as collector_module
from sentence_chain.markov_chain import (
    ChainModel,
    ConcurrentCollector,
    EmptyModelError,
    NoMatchFoundError,
    SentenceGenerator,
    generate_sentences,
    sentence_words,
)

CORPUS = "The cat sat. The dog ran. A cat ran. A bird flew over the dog."


@pytest.fixture
def model():
    return ChainModel(CORPUS)


def test_generates_exact_count(model):
    sentences = generate_sentences(model, count=5, rng=random.Random(1))
    assert len(sentences) == 5
    for sentence in sentences:
        assert sentence.endswith(".")
        first_word = sentence.split(" ")[0].rstrip(".")
        assert first_word[0].isupper()
        assert first_word.lower() in model.starting_words


def test_required_words_filter(model):
    sentences = generate_sentences(model, count=10, required_words=["cat"], rng=random.Random(2))
    assert len(sentences) == 10
    assert all("cat" in sentence_words(sentence) for sentence in sentences)


def test_required_words_ignore_case_and_duplicates(model):
    sentences = generate_sentences(
        model, count=3, required_words=["CAT", "cat"], rng=random.Random(3), max_attempts=10_000
    )
    assert all("cat" in sentence_words(sentence) for sentence in sentences)


def test_unsatisfiable_required_words_hit_the_budget(model):
    with pytest.raises(NoMatchFoundError) as excinfo:
        generate_sentences(model, count=2, required_words=["zebra"], max_attempts=50)
    assert excinfo.value.attempts == 50
    assert excinfo.value.found == 0
    assert excinfo.value.required_words == {"zebra"}


def test_budget_only_applies_to_required_words(model):
    collector = ConcurrentCollector(model, max_attempts=1)
    assert len(collector.collect(5)) == 5


def test_seeded_sequential_runs_are_reproducible(model):
    first = generate_sentences(model, count=8, rng=random.Random(5))
    second = generate_sentences(model, count=8, rng=random.Random(5))
    assert first == second


def test_parallel_generation(model, monkeypatch):
    monkeypatch.setattr(config, "NUM_WORKERS", 4)
    sentences = generate_sentences(model, count=20, parallel=True)
    assert len(sentences) == 20
    assert all(sentence.endswith(".") for sentence in sentences)


def test_parallel_generation_with_required_words(model):
    collector = ConcurrentCollector(model, workers=8)
    sentences = collector.collect(3, required_words=["dog"])
    assert len(sentences) == 3
    assert all("dog" in sentence_words(sentence) for sentence in sentences)


def test_zero_count_returns_nothing(model):
    assert generate_sentences(model, count=0) == []


def test_negative_count_is_rejected(model):
    with pytest.raises(ValueError):
        generate_sentences(model, count=-1)


def test_workers_must_be_positive(model):
    with pytest.raises(ValueError):
        ConcurrentCollector(model, workers=0)


def test_empty_model_raises():
    with pytest.raises(EmptyModelError):
        generate_sentences(ChainModel("  \n  "), count=1)


def test_worker_errors_stop_the_collection(model, monkeypatch):
    def broken(self):
        raise RuntimeError("boom")

    monkeypatch.setattr(SentenceGenerator, "generate", broken)
    with pytest.raises(RuntimeError, match="boom"):
        ConcurrentCollector(model, workers=3).collect(5)


BRANCHING_CORPUS = (
    "The cat sat on the mat. The dog sat on the cat. "
    "A cat ran to the dog! The mat was red?\nA dog sat on a red mat."
)


def test_parallel_sentences_follow_real_links(model, monkeypatch, follows_links):
    monkeypatch.setattr(config, "NUM_WORKERS", 4)
    sentences = generate_sentences(model, count=30, parallel=True)
    assert len(sentences) == 30
    assert all(follows_links(model, sentence) for sentence in sentences)


@pytest.mark.parametrize("word_length", [2, 3])
def test_parallel_multi_word_sentences_follow_real_links(word_length, monkeypatch, follows_links):
    monkeypatch.setattr(config, "NUM_WORKERS", 4)
    model = ChainModel(BRANCHING_CORPUS, word_length=word_length)
    sentences = generate_sentences(model, count=30, parallel=True)
    assert len(sentences) == 30
    assert all(follows_links(model, sentence) for sentence in sentences)


def test_zero_max_words_means_no_limit():
    sentences = generate_sentences(ChainModel("The cat sat."), count=2, max_words=0)
    assert sentences == ["The cat sat.", "The cat sat."]


def test_interrupting_the_caller_stops_parallel_workers(model, monkeypatch):
    def interrupted(futures):
        raise KeyboardInterrupt

    monkeypatch.setattr(collector_module, "as_completed", interrupted)
    # No budget and an unknown word: workers only stop when told to.
    collector = ConcurrentCollector(model, workers=4, max_attempts=0)
    errors = []

    def run():
        try:
            collector.collect(1, required_words=["zebra"])
        except KeyboardInterrupt as e:
            errors.append(e)

    caller = threading.Thread(target=run, daemon=True)
    caller.start()
    caller.join(timeout=10)

    assert not caller.is_alive()
    assert len(errors) == 1
    assert not any(t.name.startswith("chain-worker") and t.is_alive() for t in threading.enumerate())
