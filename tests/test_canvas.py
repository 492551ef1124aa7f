"""Tests for the recording canvas and PDF export."""

import dataclasses

import pytest

from lint_report.render import theme
from lint_report.render.canvas import Canvas, CircleOp, LineOp, RectOp, TextOp


def test_drawing_requires_a_page():
    canvas = Canvas()
    with pytest.raises(RuntimeError):
        canvas.rect(0, 0, 10, 10, fill=theme.PRIMARY)


def test_ops_are_recorded_on_the_current_page():
    canvas = Canvas()
    canvas.add_page()
    canvas.rect(1, 2, 3, 4, fill=theme.PRIMARY, tag="box")
    canvas.add_page()
    canvas.text(10, 20, "hello", tag="greeting")
    canvas.set_page(0)
    canvas.line(0, 5, 10, 5)

    doc = canvas.document()
    assert doc.page_count == 2
    assert [p.number for p in doc.pages] == [1, 2]
    first, second = doc.pages
    assert isinstance(first.ops[0], RectOp)
    assert isinstance(first.ops[1], LineOp)
    assert second.texts() == ["hello"]
    assert doc.texts("greeting") == ["hello"]
    assert len(doc.tagged("box")) == 1


def test_set_page_out_of_range():
    canvas = Canvas()
    canvas.add_page()
    with pytest.raises(IndexError):
        canvas.set_page(1)


def test_document_is_immutable():
    canvas = Canvas()
    canvas.add_page()
    doc = canvas.document()
    with pytest.raises(dataclasses.FrozenInstanceError):
        doc.title = "changed"
    assert isinstance(doc.pages, tuple)
    assert isinstance(doc.pages[0].ops, tuple)


def test_wrap_respects_width():
    canvas = Canvas()
    text = " ".join(["maintainability"] * 40)
    lines = canvas.wrap(text, 60, size=10)
    assert len(lines) > 1
    for line in lines:
        assert canvas.string_width(line, size=10) <= 60
    assert " ".join(lines) == text


def test_wrap_splits_long_words():
    canvas = Canvas()
    word = "x" * 300
    lines = canvas.wrap(word, 30, size=10)
    assert len(lines) > 1
    assert "".join(lines) == word
    for line in lines:
        assert canvas.string_width(line, size=10) <= 30


def test_wrap_empty_text():
    assert Canvas().wrap("", 100) == []


def test_string_width_depends_on_style():
    canvas = Canvas()
    assert canvas.string_width("Refactoring", size=10, style="B") > canvas.string_width("Refactoring", size=10)


def test_pdf_export_smoke(tmp_path):
    canvas = Canvas()
    canvas.add_page()
    canvas.rect(20, 20, 50, 10, fill=theme.PRIMARY, stroke=theme.GRAY_300)
    canvas.circle(100, 100, 10, fill=theme.DANGER)
    canvas.line(0, 150, 210, 150, color=theme.PRIMARY)
    canvas.text(105, 200, "Centered", align="C")
    canvas.text(190, 210, "Right", align="R", style="B")
    canvas.text(20, 220, "")
    canvas.add_page()

    doc = canvas.document(title="Smoke")
    data = doc.to_pdf_bytes()
    assert data[:5] == b"%PDF-"

    out = doc.save(tmp_path / "nested" / "smoke.pdf")
    assert out.read_bytes()[:5] == b"%PDF-"


def test_op_types_carry_geometry():
    c = CircleOp(10, 20, 5, fill=theme.SUCCESS)
    assert (c.x, c.y, c.r) == (10, 20, 5)
    t = TextOp(0, 0, "a")
    assert t.align == "L" and t.style == "" and t.tag is None
