"""Tests for progress module."""

from crpt_api import progress


def test_submission_progress_disabled_bar():
    """A disabled bar still tracks the batch size."""

    bar = progress.submission_progress(3, disable=True)
    try:
        assert bar.total == 3
        assert bar.disable is True
    finally:
        bar.close()


def test_submission_progress_labels(monkeypatch):
    """The bar is sized to the batch and labelled in documents."""

    calls = []

    def fake_tqdm(**kwargs):
        calls.append(kwargs)
        return kwargs

    monkeypatch.setattr(progress, "tqdm", fake_tqdm)
    progress.submission_progress(5)

    assert calls[0]["total"] == 5
    assert calls[0]["desc"] == "Submitting documents"
    assert calls[0]["unit"] == "doc"
    assert calls[0]["disable"] is False
