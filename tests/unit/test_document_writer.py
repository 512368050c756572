from __future__ import annotations

from datetime import datetime, timezone

import pytest

from sheet2doc.models.blocks import Block, BlockKind
from sheet2doc.models.stage_result import ErrorKind, Failure, Success
from sheet2doc.models.storage import Folder
from sheet2doc.services.writer import WriteOutcome, write_to_doc

TARGET = Folder(id="folder-9", name="Sheet to Doc")


def _only_doc(store):
    assert len(store.docs) == 1
    return next(iter(store.docs.values()))


def test_alternating_blocks_in_header_order(document_store):
    result = write_to_doc(document_store, "Test Doc", TARGET, ["Favorite color", "Blue"], ["Question", "Answer"])
    assert isinstance(result, Success)
    assert result.data == "https://docs.example.test/doc-1"
    doc = _only_doc(document_store)
    assert doc.title == "Test Doc"
    assert doc.folder == TARGET
    assert doc.blocks == [
        ("heading", "Question"),
        ("body", "Favorite color"),
        ("heading", "Answer"),
        ("body", "Blue"),
    ]
    assert doc.commits == 1


@pytest.mark.parametrize("n", [1, 3, 7])
def test_produces_two_blocks_per_header(document_store, n):
    headers = [f"h{i}" for i in range(n)]
    values = [f"v{i}" for i in range(n + 2)]  # extra values are ignored
    outcome = WriteOutcome()
    result = write_to_doc(document_store, "Doc", TARGET, values, headers, outcome=outcome)
    assert isinstance(result, Success)
    assert len(outcome.blocks) == 2 * n
    kinds = [b.kind for b in outcome.blocks]
    assert kinds == [BlockKind.HEADING, BlockKind.BODY] * n
    assert [b.text for b in outcome.blocks[::2]] == headers


def test_create_and_move_happen_before_content(document_store):
    write_to_doc(document_store, "Doc", TARGET, ["a"], ["h"])
    assert document_store.calls == [
        "create_document",
        "move",
        "append_heading",
        "append_paragraph",
        "commit",
        "url_of",
    ]


def test_values_are_normalized(document_store):
    when = datetime(2024, 1, 15, tzinfo=timezone.utc)
    outcome = WriteOutcome()
    write_to_doc(document_store, "Doc", TARGET, [when, 42, True, ""], ["When", "Count", "Flag", 7], outcome=outcome)
    assert outcome.blocks == [
        Block.heading("When"),
        Block.body("2024-01-15T00:00:00.000Z"),
        Block.heading("Count"),
        Block.body("42"),
        Block.heading("Flag"),
        Block.body("true"),
        Block.heading("7"),
        Block.body(""),
    ]


@pytest.mark.parametrize("missing", [None, float("nan")])
def test_missing_header_aborts_at_index(document_store, missing):
    outcome = WriteOutcome()
    result = write_to_doc(document_store, "Doc", TARGET, ["a", "b", "c"], ["h0", missing, "h2"], outcome=outcome)
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.MISSING_HEADER
    assert result.index == 1
    assert "index 1" in result.message
    doc = _only_doc(document_store)
    assert doc.blocks == [("heading", "h0"), ("body", "a")]
    # partial document stays where it was moved, with what was appended
    assert doc.folder == TARGET
    assert doc.commits == 1
    assert "url_of" not in document_store.calls


def test_missing_value_aborts_after_heading(document_store):
    result = write_to_doc(document_store, "Doc", TARGET, ["a", None, "c"], ["h0", "h1", "h2"])
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.MISSING_VALUE
    assert result.index == 1
    assert _only_doc(document_store).blocks == [("heading", "h0"), ("body", "a"), ("heading", "h1")]


def test_short_data_row_is_missing_value(document_store):
    result = write_to_doc(document_store, "Doc", TARGET, ["a"], ["h0", "h1"])
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.MISSING_VALUE
    assert result.index == 1


@pytest.mark.parametrize("step", ["create_document", "move", "append_paragraph", "commit", "url_of"])
def test_store_errors_become_document_write_error(fake_document_store_cls, step):
    store = fake_document_store_cls(fail_on=step)
    result = write_to_doc(store, "Doc", TARGET, ["a"], ["h"])
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.DOCUMENT_WRITE_ERROR
    assert f"{step} failed" in result.message
