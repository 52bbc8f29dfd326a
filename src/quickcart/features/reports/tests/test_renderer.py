import pytest

from quickcart.features.reports.exceptions import RendererClosedError
from quickcart.features.reports.layout import LayoutBox, PageGeometry
from quickcart.features.reports.renderer import PdfRenderer, ZEBRA_TONES, zebra_fill


def test_zebra_fill_alternates_by_parity():
    tones = [zebra_fill(i) for i in range(6)]
    assert tones == ["#ffffff", "#f9fafb", "#ffffff", "#f9fafb", "#ffffff", "#f9fafb"]
    assert set(tones) == set(ZEBRA_TONES)


def test_finish_returns_pdf_bytes():
    renderer = PdfRenderer()
    renderer.draw_text("Hello", 50, 50, 200)
    content = renderer.finish()
    assert content.startswith(b"%PDF")
    assert renderer.finished


def test_drawing_after_finish_is_an_error():
    renderer = PdfRenderer()
    renderer.finish()
    with pytest.raises(RendererClosedError):
        renderer.draw_box(LayoutBox(50, 50, 10, 10), fill_color="#ffffff")
    with pytest.raises(RendererClosedError):
        renderer.draw_text("late", 50, 50, 100)
    with pytest.raises(RendererClosedError):
        renderer.new_page()
    with pytest.raises(RendererClosedError):
        renderer.finish()


def test_operations_are_recorded_per_page():
    renderer = PdfRenderer()
    renderer.draw_box(LayoutBox(50, 60, 100, 20), fill_color="#f3f4f6", stroke_color="#000000", tag="box-a")
    renderer.new_page()
    renderer.draw_text("Second page", 50, 50, 200, tag="text-b")

    kinds = [(op.kind, op.page_index, op.tag) for op in renderer.operations]
    assert kinds == [("box", 0, "box-a"), ("page", 1, None), ("text", 1, "text-b")]
    assert renderer.page_count == 2

    box_op = renderer.operations[0]
    assert box_op.fill_color == "#f3f4f6"
    assert box_op.stroke_color == "#000000"
    assert box_op.box == LayoutBox(50, 60, 100, 20)


def test_text_box_height_follows_wrapped_lines():
    renderer = PdfRenderer()
    box = renderer.draw_text("one two three", 50, 100, 400, font_size=10, lines=["one", "two", "three"])
    assert box == LayoutBox(50, 100, 400, pytest.approx(36.0))


def test_unknown_alignment_is_rejected():
    renderer = PdfRenderer()
    with pytest.raises(ValueError):
        renderer.draw_text("x", 50, 50, 100, align="justify")


def test_custom_page_size():
    renderer = PdfRenderer(geometry=PageGeometry(width=300, height=400, margin=20, break_threshold=350))
    renderer.draw_box(LayoutBox(20, 0, 260, 400), fill_color="#f9fafb")
    assert renderer.operations[-1].box.bottom == renderer.geometry.height

    content = renderer.finish()
    assert b"/MediaBox [ 0 0 300 400 ]" in content
