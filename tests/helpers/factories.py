TEST_PASSWORD = "testpass123"


def question_data(**overrides):
    """Column values for a snapshot question; override any field per test."""
    data = {
        "question_text": "Pick the right option",
        "options": {"a": "one", "b": "two", "c": "three", "d": "four"},
        "correct_option": "b",
        "subject": "Physics",
        "topic": "General",
        "question_type": "SINGLE",
        "difficulty": "MEDIUM",
        "marks": 4,
        "negative": -1,
    }
    data.update(overrides)
    return data
