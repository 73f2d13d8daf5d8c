"""
Unit tests for the rule-based sentiment classifier.

Expected scores are worked out by hand from the word lists, so a change
in vocabulary or weights shows up here first.
"""

import pytest

from chatterdoc.sentiment import (
    NEGATION_WORDS,
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
    STRONG_NEGATIVE_PHRASES,
    STRONG_POSITIVE_PHRASES,
    SentimentLabel,
    SentimentScore,
    analyze_text_sentiment,
    score_text_sentiment,
    split_sentences,
)

NEUTRAL_TEXT = "The package arrived on Tuesday"


@pytest.mark.parametrize("rating", [None, 0, 1, 2, 3, 4, 5])
@pytest.mark.parametrize("text", [
    "I love this",
    "This is broken",
    NEUTRAL_TEXT,
    "...!!!",
    "not",
])
def test_always_returns_a_label(text, rating):
    """Test that any non-empty text and rating yields one of the three labels."""
    label = analyze_text_sentiment(text, rating)
    assert label in set(SentimentLabel)


def test_deterministic():
    """Test that identical input gives identical output."""
    text = "Great app but the sync is slow. Support never replied!"
    assert analyze_text_sentiment(text, 4) == analyze_text_sentiment(text, 4)
    assert score_text_sentiment(text, 4) == score_text_sentiment(text, 4)


def test_label_serializes_as_plain_string():
    """Test that labels compare equal to their stored string form."""
    assert SentimentLabel.POSITIVE == "positive"
    assert SentimentLabel.NEGATIVE.value == "negative"


# ===================
# RATING
# ===================

def test_rating_five_makes_plain_text_positive():
    assert analyze_text_sentiment(NEUTRAL_TEXT, 5) == SentimentLabel.POSITIVE


def test_rating_four_makes_plain_text_positive():
    assert analyze_text_sentiment(NEUTRAL_TEXT, 4) == SentimentLabel.POSITIVE


def test_rating_one_makes_plain_text_negative():
    assert analyze_text_sentiment(NEUTRAL_TEXT, 1) == SentimentLabel.NEGATIVE


def test_rating_two_makes_plain_text_negative():
    assert analyze_text_sentiment(NEUTRAL_TEXT, 2) == SentimentLabel.NEGATIVE


@pytest.mark.parametrize("rating", [None, 3])
def test_middle_or_missing_rating_stays_neutral(rating):
    assert analyze_text_sentiment(NEUTRAL_TEXT, rating) == SentimentLabel.NEUTRAL


def test_zero_rating_counts_as_no_rating():
    """Test that the widget's 0 'no rating' value adds nothing."""
    assert score_text_sentiment(NEUTRAL_TEXT, 0) == SentimentScore(0.0, 0.0)
    assert score_text_sentiment("I love it", 0) == score_text_sentiment("I love it")


def test_rating_adds_two_points():
    score = score_text_sentiment("I love it", 5)
    assert score == SentimentScore(positive=3.0, negative=0.0)


# ===================
# WORDS AND NEGATION
# ===================

def test_plain_positive_word():
    assert analyze_text_sentiment("I love this") == SentimentLabel.POSITIVE


def test_negated_positive_word_is_not_positive():
    """Test that 'not love' counts against the text."""
    score = score_text_sentiment("I do not love this")
    assert score == SentimentScore(positive=0.0, negative=1.0)
    assert analyze_text_sentiment("I do not love this") != SentimentLabel.POSITIVE


def test_negated_negative_word_counts_half_positive():
    score = score_text_sentiment("It is not bad")
    assert score == SentimentScore(positive=0.5, negative=0.0)
    assert analyze_text_sentiment("It is not bad") == SentimentLabel.POSITIVE


def test_negation_is_scoped_to_its_sentence():
    """Test that a negation in one sentence leaves the next one alone."""
    text = "I do not like the colors. The app is great."
    assert score_text_sentiment(text) == SentimentScore(positive=1.0, negative=0.0)
    assert analyze_text_sentiment(text) == SentimentLabel.POSITIVE


def test_uppercase_text_is_lowercased():
    assert analyze_text_sentiment("EXCELLENT SERVICE") == SentimentLabel.POSITIVE


def test_punctuation_attached_to_word_prevents_match():
    """Test that only whole tokens match, so 'great,' is ignored."""
    score = score_text_sentiment("Great, fast")
    assert score == SentimentScore(positive=1.0, negative=0.0)


def test_word_in_both_negation_and_negative_lists():
    """Test that "can't" negates its own sentence and then counts half positive."""
    score = score_text_sentiment("I can't complain")
    assert score == SentimentScore(positive=0.5, negative=0.0)


def test_multi_word_vocabulary_entries_never_match():
    """Test that 'not working' in the list has no effect on its own."""
    assert "not working" in NEGATIVE_WORDS
    assert score_text_sentiment("It is not working") == SentimentScore(0.0, 0.0)


# ===================
# PHRASES
# ===================

def test_strong_positive_phrase_boost():
    """Test that 'really good' adds 1.5 on top of 'really' and 'good'."""
    score = score_text_sentiment("This is really good")
    assert score == SentimentScore(positive=3.5, negative=0.0)
    assert analyze_text_sentiment("This is really good") == SentimentLabel.POSITIVE


def test_strong_negative_phrase_boost():
    score = score_text_sentiment("That was very bad")
    # 'very' is in the positive list, 'bad' in the negative list
    assert score == SentimentScore(positive=1.0, negative=2.5)
    assert analyze_text_sentiment("That was very bad") == SentimentLabel.NEGATIVE


def test_negated_strong_positive_phrase_subtracts():
    """Known quirk: a negated strong phrase lowers its own side."""
    score = score_text_sentiment("It was not really good")
    assert score == SentimentScore(positive=-1.5, negative=2.0)
    assert score.label == SentimentLabel.NEGATIVE


def test_negated_strong_negative_phrase_subtracts():
    """Known quirk: 'not good' is itself a negated strong negative phrase.

    The phrase drives the negative side below zero, so the plain
    sentence 'This is not good' comes out positive.
    """
    score = score_text_sentiment("This is not good")
    assert score == SentimentScore(positive=0.0, negative=-0.5)
    assert score.label == SentimentLabel.POSITIVE


# ===================
# THRESHOLD
# ===================

def test_equal_scores_are_neutral():
    score = score_text_sentiment("good and slow")
    assert score == SentimentScore(positive=1.0, negative=1.0)
    assert score.label == SentimentLabel.NEUTRAL


def test_no_evidence_is_neutral():
    assert SentimentScore().label == SentimentLabel.NEUTRAL


@pytest.mark.parametrize("positive,negative,expected", [
    (1.2, 1.0, SentimentLabel.NEUTRAL),
    (1.25, 1.0, SentimentLabel.POSITIVE),
    (1.0, 1.2, SentimentLabel.NEUTRAL),
    (1.0, 1.25, SentimentLabel.NEGATIVE),
    (0.5, 0.0, SentimentLabel.POSITIVE),
    (0.0, 0.5, SentimentLabel.NEGATIVE),
])
def test_dominance_ratio(positive, negative, expected):
    """Test that one side must beat the other by more than 1.2x."""
    assert SentimentScore(positive, negative).label == expected


# ===================
# SENTENCES
# ===================

def test_split_sentences_collapses_repeated_delimiters():
    assert split_sentences("Great!!! Bad... ok?") == ["great", " bad", " ok"]


def test_split_sentences_skips_blank_sentences():
    assert split_sentences("  .  !  ") == []


def test_repeated_delimiters_score_each_sentence():
    assert score_text_sentiment("Great!!! Bad...") == SentimentScore(1.0, 1.0)


# ===================
# END TO END EXAMPLES
# ===================

def test_support_praise_with_high_rating():
    text = "The support team was excellent and fast!"
    assert score_text_sentiment(text, 5) == SentimentScore(positive=4.0, negative=0.0)
    assert analyze_text_sentiment(text, 5) == SentimentLabel.POSITIVE


def test_bug_complaint_with_low_rating():
    text = "This is broken and the bug is so bad, it's frustrating."
    # 'bad,' keeps its comma so neither 'bad' nor 'so bad' match
    assert score_text_sentiment(text, 1) == SentimentScore(positive=0.0, negative=5.0)
    assert analyze_text_sentiment(text, 1) == SentimentLabel.NEGATIVE


def test_lukewarm_feedback_with_middle_rating():
    text = "It's okay, does what it says."
    assert analyze_text_sentiment(text, 3) == SentimentLabel.NEUTRAL


# ===================
# VOCABULARY
# ===================

def test_vocabularies_are_immutable_lowercase_sets():
    for vocabulary in (POSITIVE_WORDS, NEGATIVE_WORDS, NEGATION_WORDS,
                       STRONG_POSITIVE_PHRASES, STRONG_NEGATIVE_PHRASES):
        assert isinstance(vocabulary, frozenset)
        assert all(entry == entry.lower() for entry in vocabulary)


def test_negation_vocabulary():
    assert NEGATION_WORDS == {
        "not", "no", "never", "don't", "doesn't", "didn't",
        "won't", "wouldn't", "can't", "cannot",
    }


def test_phrase_vocabularies():
    assert STRONG_POSITIVE_PHRASES == {
        "really good", "very good", "quite good", "so good", "very nice", "really great",
    }
    assert STRONG_NEGATIVE_PHRASES == {
        "very bad", "really bad", "so bad", "too bad", "not good", "very poor",
    }


def test_word_list_sizes():
    assert len(POSITIVE_WORDS) == 51
    assert len(NEGATIVE_WORDS) == 59


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
