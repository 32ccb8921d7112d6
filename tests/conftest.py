import pandas as pd
import pytest

SMALL_STOP_WORDS = frozenset({"the", "a", "is", "this", "and", "of", "to", "it", "i"})


class IdentityLemmatizer:
    def lemmatize(self, token):
        return token


class PluralLemmatizer:
    """Strips a trailing 's' so tests can see lemmatization happen."""

    def lemmatize(self, token):
        return token[:-1] if token.endswith("s") and len(token) > 3 else token


@pytest.fixture
def stop_words():
    return SMALL_STOP_WORDS


@pytest.fixture
def lemmatizer():
    return IdentityLemmatizer()


@pytest.fixture
def toy_comments():
    """10 comments: 6 Favorable, 3 Oppose, 1 Neutral."""
    return pd.DataFrame(
        {
            "comment_id": list(range(101, 111)),
            "comment": [
                "Great policy, I love this plan!",
                "Love the new park and the trees",
                "Great job by the council, love it",
                "This plan is great for families",
                "Love love love the 2 new buses",
                "Great idea, great park",
                "Terrible plan, hate the cost",
                "Hate this, waste of money!!",
                "Terrible waste, hate the buses",
                "The meeting is on Tuesday",
            ],
            "score": [3, 1, 2, 5, 0.5, 4, -2, -1, -3, 0],
        }
    )


@pytest.fixture
def toy_csv(tmp_path, toy_comments):
    path = tmp_path / "comments.csv"
    toy_comments.to_csv(path, index=False)
    return path
