from jakarta_insight.core.scoring import calculate_sentiment_score, dominant_sentiment, urgency_label


def test_equal_positive_and_negative_is_neutral_midpoint():
    buckets = [{"key": "Positive", "doc_count": 10}, {"key": "Negative", "doc_count": 10}]
    assert calculate_sentiment_score(buckets) == "50.00"


def test_weighted_by_document_count():
    buckets = [
        {"key": "Positive", "doc_count": 3},
        {"key": "Neutral", "doc_count": 1},
    ]
    assert calculate_sentiment_score(buckets) == "87.50"


def test_unknown_labels_score_zero():
    buckets = [{"key": "Positive", "doc_count": 1}, {"key": "Mixed", "doc_count": 1}]
    assert calculate_sentiment_score(buckets) == "50.00"


def test_no_documents():
    assert calculate_sentiment_score([]) == "0"


def test_urgency_label_boundaries():
    assert urgency_label(0) == "Low"
    assert urgency_label(29.9) == "Low"
    assert urgency_label(30) == "Medium"
    assert urgency_label(69) == "Medium"
    assert urgency_label(70) == "High"
    assert urgency_label(100) == "High"


def test_dominant_sentiment():
    assert dominant_sentiment([{"key": "Negative", "doc_count": 9}, {"key": "Positive", "doc_count": 1}]) == "Negative"
    assert dominant_sentiment([]) == "neutral"
