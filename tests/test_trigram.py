from collections import Counter

import pytest
import torch

from trigramlm.models.trigram import (
    EOS_TOKEN,
    UNK_TOKEN,
    TrigramModel,
    select_weighted,
)


def seeded_model(seed=0):
    return TrigramModel(generator=torch.Generator().manual_seed(seed))


def test_counts_match_trigram_windows():
    corpus = "The cat sat on the mat the CAT ran"
    model = seeded_model()
    model.train(corpus)

    words = corpus.lower().split()
    windows = Counter(zip(words, words[1:]))
    for context, counter in model.trigram_counts.items():
        assert sum(counter.values()) == windows[context]
    assert model.next_word_counts("the", "cat") == {"sat": 1, "ran": 1}


def test_training_is_deterministic():
    corpus = "a b c a b d a b c\n  x y   z"
    first, second = seeded_model(), seeded_model(1)
    first.train(corpus)
    second.train(corpus)
    assert first.trigram_counts == second.trigram_counts


def test_train_accumulates():
    model = seeded_model()
    model.train("a b c")
    model.train("a b c a b d")
    assert model.next_word_counts("a", "b") == {"c": 2, "d": 1}


@pytest.mark.parametrize("corpus", ["", "   \n\t ", "one", "one two"])
def test_short_corpus_trains_nothing(corpus):
    model = seeded_model()
    model.train(corpus)
    assert len(model) == 0
    assert model.get_next_word("one", "two") == UNK_TOKEN


def test_whitespace_runs_are_one_delimiter():
    model = seeded_model()
    model.train("  a \n\n b\t\tc  ")
    assert model.trigram_counts == {("a", "b"): Counter({"c": 1})}


def test_lookup_is_case_sensitive():
    model = seeded_model()
    model.train("The Cat Sat")
    assert model.get_next_word("the", "cat") == "sat"
    assert model.get_next_word("The", "Cat") == UNK_TOKEN


def test_unknown_context_returns_unk():
    model = seeded_model()
    model.train("the cat sat on the mat")
    for _ in range(20):
        assert model.get_next_word("no", "such") == UNK_TOKEN


def test_empty_continuations_return_empty_string():
    model = seeded_model()
    model.trigram_counts[("a", "b")] = Counter()
    assert model.get_next_word("a", "b") == ""


def test_continuations_keep_first_seen_order():
    model = seeded_model()
    model.train("x y c x y a x y b x y a")
    assert list(model.trigram_counts[("x", "y")]) == ["c", "a", "b"]


def test_select_weighted_boundaries():
    counts = {"a": 3, "b": 1, "c": 1}
    assert [select_weighted(counts, r) for r in range(5)] == ["a", "a", "a", "b", "c"]


@pytest.mark.parametrize("r", [-1, 5])
def test_select_weighted_rejects_out_of_range(r):
    with pytest.raises(ValueError):
        select_weighted({"a": 3, "b": 1, "c": 1}, r)


def test_select_weighted_rejects_empty():
    with pytest.raises(ValueError):
        select_weighted({}, 0)


def test_sampling_matches_counts():
    model = seeded_model(1234)
    model.train("x y a x y a x y a x y b x y c")
    assert model.next_word_counts("x", "y") == {"a": 3, "b": 1, "c": 1}

    draws = 10_000
    seen = Counter(model.get_next_word("x", "y") for _ in range(draws))
    assert set(seen) == {"a", "b", "c"}
    for word, expected in {"a": 0.6, "b": 0.2, "c": 0.2}.items():
        assert abs(seen[word] / draws - expected) < 0.05


def test_end_to_end_continuations():
    model = seeded_model(7)
    model.train("the cat sat on the mat the cat ran")

    draws = 4_000
    seen = Counter(model.get_next_word("the", "cat") for _ in range(draws))
    assert set(seen) <= {"sat", "ran"}
    assert abs(seen["sat"] / draws - 0.5) < 0.05


def test_same_seed_same_samples():
    corpus = "the cat sat on the mat the cat ran the cat hid"
    first, second = seeded_model(42), seeded_model(42)
    first.train(corpus)
    second.train(corpus)
    assert [first.get_next_word("the", "cat") for _ in range(50)] == \
        [second.get_next_word("the", "cat") for _ in range(50)]


def test_default_generator_samples():
    model = TrigramModel()
    model.train(f"the end {EOS_TOKEN}")
    assert model.get_next_word("the", "end") == EOS_TOKEN


def test_merge_sums_counts():
    left, right = seeded_model(), seeded_model()
    left.train("a b c a b d")
    right.train("a b c x y z")

    merged_lr, merged_rl = seeded_model(), seeded_model()
    merged_lr.merge(left)
    merged_lr.merge(right)
    merged_rl.merge(right)
    merged_rl.merge(left)

    assert merged_lr.trigram_counts == merged_rl.trigram_counts
    assert merged_lr.next_word_counts("a", "b") == {"c": 2, "d": 1}
    assert merged_lr.next_word_counts("x", "y") == {"z": 1}
    # sources are left untouched
    assert left.next_word_counts("a", "b") == {"c": 1, "d": 1}


def test_most_common_contexts():
    model = seeded_model()
    model.train("a b c a b d a b e")
    top = model.most_common_contexts(1)
    assert top == [(("a", "b"), 3)]
    assert len(model.most_common_contexts(100)) == len(model)
