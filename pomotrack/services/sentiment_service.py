from typing import Optional, Protocol, Tuple

from textblob import TextBlob

from pomotrack.config import SENTIMENT_CLASSIFIER

# Confidence below this is reported as NEUTRAL
NEUTRAL_THRESHOLD = 0.6


class SentimentClassifier(Protocol):
    def classify(self, text: str) -> Tuple[str, float]:
        ...


class TextBlobSentimentClassifier:
    """
    Label a reflection from TextBlob polarity.

    Polarity p in [-1, 1] becomes a confidence (1 + |p|) / 2 in [0.5, 1], so
    the label/score pair reads like a two-class classifier's top prediction.
    """

    def classify(self, text: str) -> Tuple[str, float]:
        if not text or not text.strip():
            return "NEUTRAL", 0.5

        polarity = TextBlob(text).sentiment.polarity
        score = round((1 + abs(polarity)) / 2, 4)
        label = "POSITIVE" if polarity >= 0 else "NEGATIVE"
        if score < NEUTRAL_THRESHOLD:
            label = "NEUTRAL"
        return label, score


def get_sentiment_classifier() -> Optional[SentimentClassifier]:
    if SENTIMENT_CLASSIFIER == "textblob":
        return TextBlobSentimentClassifier()
    return None
