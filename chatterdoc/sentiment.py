# Chatter Doc Sentiment
# Rule-based sentiment classification for feedback items

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SentimentLabel(str, Enum):
    POSITIVE = 'positive'
    NEGATIVE = 'negative'
    NEUTRAL = 'neutral'


POSITIVE_WORDS = frozenset([
    # Strong positive
    'love', 'excellent', 'amazing', 'outstanding', 'perfect', 'fantastic',
    'wonderful', 'superb', 'brilliant', 'exceptional', 'terrific', 'awesome',

    # Positive
    'good', 'great', 'happy', 'pleased', 'satisfied', 'enjoy', 'impressive',
    'nice', 'thank', 'thanks', 'grateful', 'appreciate', 'helpful', 'recommend',
    'better', 'best', 'improved', 'well', 'easy', 'convenient', 'user-friendly',
    'clear', 'smooth', 'reliable', 'efficient', 'effective', 'fast', 'responsive',
    'intuitive', 'valuable', 'worth', 'beneficial', 'glad', 'joy',

    # Positive modifiers
    'very', 'really', 'extremely', 'highly', 'absolutely',
])

NEGATIVE_WORDS = frozenset([
    # Strong negative
    'hate', 'terrible', 'awful', 'horrible', 'dreadful', 'abysmal', 'disgusting',
    'frustrating', 'disappointing', 'useless', 'pointless', 'waste',

    # Negative
    'bad', 'poor', 'difficult', 'hard', 'confusing', 'slow', 'broken', 'fail',
    'issue', 'problem', 'bug', 'error', 'crash', 'glitch', 'annoying', 'dislike',
    'unhappy', 'dissatisfied', 'not working', "doesn't work", "can't", 'cannot',
    'never', 'worst', 'fix', 'trouble', 'complicated', 'inconsistent',
    'unreliable', 'expensive', 'overpriced', 'lacking', 'missing', 'incomplete',

    # Criticism indicators
    'but', 'however', 'though', 'although', 'despite', 'unfortunately', 'sadly',
    'improve', 'should', 'could', 'would', 'need to', 'needs',
])

NEGATION_WORDS = frozenset([
    'not', 'no', 'never', "don't", "doesn't", "didn't", "won't", "wouldn't",
    "can't", 'cannot',
])

STRONG_POSITIVE_PHRASES = frozenset([
    'really good', 'very good', 'quite good', 'so good', 'very nice', 'really great',
])

STRONG_NEGATIVE_PHRASES = frozenset([
    'very bad', 'really bad', 'so bad', 'too bad', 'not good', 'very poor',
])

PHRASE_WEIGHT = 1.5
NEGATED_NEGATIVE_WEIGHT = 0.5
RATING_WEIGHT = 2
DOMINANCE_RATIO = 1.2

SENTENCE_SPLIT_RE = re.compile(r'[.!?]+')


@dataclass(frozen=True)
class SentimentScore:
    """Accumulated evidence for one piece of feedback."""
    positive: float = 0.0
    negative: float = 0.0

    @property
    def label(self) -> SentimentLabel:
        if self.positive > self.negative * DOMINANCE_RATIO:
            return SentimentLabel.POSITIVE
        if self.negative > self.positive * DOMINANCE_RATIO:
            return SentimentLabel.NEGATIVE
        return SentimentLabel.NEUTRAL


def split_sentences(text: str) -> list:
    """Split lowercased text on runs of . ! ? and drop blank sentences"""
    return [s for s in SENTENCE_SPLIT_RE.split(text.lower()) if s.strip()]


def _score_sentence(words: list) -> tuple:
    """Score one tokenized sentence, returning (positive, negative) deltas.

    A single negation word anywhere in the sentence flips every match in it:
    positive words count as negative, negative words count half toward
    positive, and strong phrases subtract from their own side instead of
    adding to it.
    """
    negated = any(word in NEGATION_WORDS for word in words)
    positive = 0.0
    negative = 0.0

    for word in words:
        if word in POSITIVE_WORDS:
            if negated:
                negative += 1
            else:
                positive += 1

        if word in NEGATIVE_WORDS:
            if negated:
                positive += NEGATED_NEGATIVE_WEIGHT
            else:
                negative += 1

    phrase_weight = -PHRASE_WEIGHT if negated else PHRASE_WEIGHT
    for first, second in zip(words, words[1:]):
        phrase = f'{first} {second}'
        if phrase in STRONG_POSITIVE_PHRASES:
            positive += phrase_weight
        if phrase in STRONG_NEGATIVE_PHRASES:
            negative += phrase_weight

    return positive, negative


def score_text_sentiment(text: str, rating: Optional[int] = None) -> SentimentScore:
    """Accumulate positive and negative evidence for text plus star rating.

    A rating of 0 is the widget's "no rating" value and counts as absent.
    """
    positive = 0.0
    negative = 0.0

    for sentence in split_sentences(text):
        pos, neg = _score_sentence(sentence.split())
        positive += pos
        negative += neg

    if rating:
        if rating >= 4:
            positive += RATING_WEIGHT
        elif rating <= 2:
            negative += RATING_WEIGHT

    return SentimentScore(positive=positive, negative=negative)


def analyze_text_sentiment(text: str, rating: Optional[int] = None) -> SentimentLabel:
    """Classify feedback text as positive, negative or neutral.

    Deterministic and side-effect free. Callers must reject empty text
    before calling; the classifier itself never raises for a string.
    """
    return score_text_sentiment(text, rating).label
