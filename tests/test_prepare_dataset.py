import pandas as pd
import pytest

from stance_analysis.prepare_dataset import (
    FAVORABLE,
    NEUTRAL,
    OPPOSE,
    allocate_stratified_counts,
    assign_stance,
    label_stance,
    load_comments,
    clean_comments,
    prepare_dataset,
    stratified_sample,
)


@pytest.mark.parametrize(
    "score,expected",
    [
        (5, FAVORABLE),
        (0.001, FAVORABLE),
        (1e9, FAVORABLE),
        (-0.001, OPPOSE),
        (-7, OPPOSE),
        (0, NEUTRAL),
        (0.0, NEUTRAL),
        (-0.0, NEUTRAL),
    ],
)
def test_label_stance(score, expected):
    assert label_stance(score) == expected


def test_assign_stance_matches_label_stance_and_leaves_input_alone(toy_comments):
    out = assign_stance(toy_comments)
    assert "stance" not in toy_comments.columns
    assert list(out["stance"]) == [label_stance(s) for s in toy_comments["score"]]
    assert set(out["stance"]) <= {FAVORABLE, NEUTRAL, OPPOSE}


def test_allocation_is_proportional():
    counts = pd.Series({FAVORABLE: 700, OPPOSE: 250, NEUTRAL: 50})
    alloc = allocate_stratified_counts(counts, 100)
    assert alloc.to_dict() == {FAVORABLE: 70, NEUTRAL: 5, OPPOSE: 25}


def test_allocation_rounds_to_exact_total():
    counts = pd.Series({FAVORABLE: 333, OPPOSE: 333, NEUTRAL: 334})
    alloc = allocate_stratified_counts(counts, 10)
    assert alloc.sum() == 10
    for label, k in alloc.items():
        assert abs(k - 10 * counts[label] / 1000) < 1


def test_allocation_keeps_tiny_class_and_skips_empty_one():
    counts = pd.Series({FAVORABLE: 990, OPPOSE: 8, NEUTRAL: 2, "Other": 0})
    alloc = allocate_stratified_counts(counts, 100)
    assert "Other" not in alloc.index
    assert alloc[NEUTRAL] >= 1
    assert alloc[OPPOSE] >= 1
    assert alloc.sum() == 100


def test_allocation_caps_at_population():
    counts = pd.Series({FAVORABLE: 6, OPPOSE: 3, NEUTRAL: 1})
    alloc = allocate_stratified_counts(counts, 50)
    assert alloc.to_dict() == {FAVORABLE: 6, NEUTRAL: 1, OPPOSE: 3}


def test_stratified_sample_counts_and_seed():
    df = pd.DataFrame(
        {
            "comment_id": range(1000),
            "stance": [FAVORABLE] * 700 + [OPPOSE] * 250 + [NEUTRAL] * 50,
        }
    )
    a = stratified_sample(df, "stance", n=200, random_state=7)
    b = stratified_sample(df, "stance", n=200, random_state=7)
    assert len(a) == 200
    assert a["stance"].value_counts().to_dict() == {FAVORABLE: 140, OPPOSE: 50, NEUTRAL: 10}
    assert a["comment_id"].is_unique
    pd.testing.assert_frame_equal(a, b)


def test_stratified_sample_warns_about_small_class(capsys):
    df = pd.DataFrame({"comment_id": range(100), "stance": [FAVORABLE] * 97 + [NEUTRAL] * 3})
    stratified_sample(df, "stance", n=50, random_state=0)
    assert "[warn] class 'Neutral'" in capsys.readouterr().out


def test_load_comments_validates_columns(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"comment_id": [1], "text": ["x"], "score": [1]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="comment"):
        load_comments(path)


def test_load_comments_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_comments(tmp_path / "nope.csv")


def test_load_comments_drops_bad_scores_and_duplicate_ids(tmp_path):
    path = tmp_path / "c.csv"
    pd.DataFrame(
        {
            "comment_id": [1, 2, 2, 3, 4],
            "comment": ["a", "b", "b again", None, "d"],
            "score": ["1", "-1", "3", "0", "n/a"],
        }
    ).to_csv(path, index=False)
    df = load_comments(path)
    assert list(df["comment_id"]) == [1, 2, 3]
    assert list(df["score"]) == [1.0, -1.0, 0.0]
    # missing text is kept
    assert df["comment"].isna().sum() == 1


def test_prepare_dataset_writes_sample_snapshot(toy_csv, tmp_path):
    frame, meta = prepare_dataset(toy_csv, outdir=tmp_path / "out", sample_size=10, random_state=1)
    sample = pd.read_csv(meta["out_sample"])
    assert list(frame["comment_id"]) == list(sample["comment_id"])
    assert meta["dropped_rows"] == 0
    assert list(sample.columns) == ["comment_id", "comment", "score", "stance"]
    assert meta["sample_rows"] == 10
    assert sample["stance"].value_counts().to_dict() == {FAVORABLE: 6, OPPOSE: 3, NEUTRAL: 1}


def test_allocation_leftover_skips_class_raised_to_one():
    # Neutral's exact share is 0.9: it is raised to 1 and gets nothing more
    counts = pd.Series({FAVORABLE: 550, OPPOSE: 360, NEUTRAL: 90})
    alloc = allocate_stratified_counts(counts, 10)
    assert alloc.to_dict() == {FAVORABLE: 5, NEUTRAL: 1, OPPOSE: 4}
    for label, k in alloc.items():
        assert abs(k - 10 * counts[label] / 1000) < 1


def test_stratified_sample_of_empty_frame_is_empty():
    df = pd.DataFrame({"comment_id": [], "stance": []})
    out = stratified_sample(df, "stance", n=10)
    assert out.empty
    assert list(out.columns) == ["comment_id", "stance"]


def test_clean_comments_without_scores_raises():
    df = pd.DataFrame({"comment_id": [1, 2], "comment": ["a", "b"], "score": ["x", None]})
    with pytest.raises(ValueError, match="no comments with a numeric score"):
        clean_comments(df)


def test_prepare_dataset_header_only_file_raises(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("comment_id,comment,score\n", encoding="utf-8")
    with pytest.raises(ValueError, match="no comments"):
        prepare_dataset(path, outdir=tmp_path / "out")


def test_prepare_dataset_rejects_zero_sample_size(toy_csv, tmp_path):
    with pytest.raises(ValueError, match="sample_size"):
        prepare_dataset(toy_csv, outdir=tmp_path / "out", sample_size=0)
