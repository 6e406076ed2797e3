from __future__ import annotations

import math
from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

import numpy as np
from PIL import Image

from figplot import BackendError, FigSize, Figure, FigureFormat, Subplot
from figplot.canvas import (
    Alignment,
    Area,
    CanvasDescriptor,
    Circle,
    Color,
    CurveDescriptor,
    FileFormat,
    FillDescriptor,
    ImageFormat,
    LineDescriptor,
    Point,
    ShapeDescriptor,
    Size,
    TextDescriptor,
    TextExtents,
    align_text,
    create_canvas,
)
from figplot.raster import RasterCanvas, blend_mask, dash_segments, new_canvas
from figplot.svg import SvgCanvas


def _small_figure() -> Figure:
    fig = Figure(format=FigureFormat(size=FigSize(2.0, 1.5), dpi=100))
    subplot = fig.add_subplot((1, 1, 1), Subplot(title="demo"))
    subplot.plot([0, 1, 2], [0, 1, 8])
    subplot.fill_between([0, 1, 2], [1, 2, 3], [0, 0, 0])
    return fig


class AlignTextTests(unittest.TestCase):
    EXTENTS = TextExtents(x_bearing=0.0, y_bearing=-10.0, width=20.0, height=10.0)

    def test_center_alignment_centers_ink_box(self) -> None:
        x, y = align_text(100.0, 50.0, 0.0, self.EXTENTS, Alignment.CENTER)
        self.assertAlmostEqual(x, 90.0)
        self.assertAlmostEqual(y, 55.0)

    def test_edge_alignments(self) -> None:
        self.assertAlmostEqual(align_text(100.0, 50.0, 0.0, self.EXTENTS, Alignment.RIGHT)[0], 80.0)
        self.assertAlmostEqual(align_text(100.0, 50.0, 0.0, self.EXTENTS, Alignment.LEFT)[0], 100.0)
        self.assertAlmostEqual(align_text(100.0, 50.0, 0.0, self.EXTENTS, Alignment.TOP)[1], 60.0)
        self.assertAlmostEqual(align_text(100.0, 50.0, 0.0, self.EXTENTS, Alignment.BOTTOM)[1], 50.0)

    def test_rotated_center_still_centers(self) -> None:
        x, y = align_text(100.0, 50.0, 1.5 * math.pi, self.EXTENTS, Alignment.CENTER)
        # ink center of the rotated box must land back on the anchor
        cx = x + (0.0 + 10.0) * math.cos(1.5 * math.pi) - (-10.0 + 5.0) * math.sin(1.5 * math.pi)
        cy = y + (0.0 + 10.0) * math.sin(1.5 * math.pi) + (-10.0 + 5.0) * math.cos(1.5 * math.pi)
        self.assertAlmostEqual(cx, 100.0)
        self.assertAlmostEqual(cy, 50.0)


class RasterPrimitiveTests(unittest.TestCase):
    def test_dash_segments_split_polyline(self) -> None:
        runs = list(dash_segments([(0.0, 0.0), (10.0, 0.0)], [2.0, 2.0]))
        self.assertEqual(len(runs), 3)
        for run, (start, end) in zip(runs, [(0.0, 2.0), (4.0, 6.0), (8.0, 10.0)]):
            self.assertAlmostEqual(run[0][0], start)
            self.assertAlmostEqual(run[-1][0], end)

    def test_dash_segments_without_pattern_keep_line(self) -> None:
        points = [(0.0, 0.0), (5.0, 5.0), (10.0, 0.0)]
        self.assertEqual(list(dash_segments(points, [])), [points])

    def test_blend_mask_respects_clip_area(self) -> None:
        buffer = new_canvas(4, 4, (0, 0, 0, 0))
        mask = np.full((4, 4), 255, dtype=np.uint8)
        blend_mask(buffer, 0, 0, mask, Color.RED, clip_area=Area(0, 2, 0, 2))
        # y-up clip area: bottom-left quadrant in device rows 2..3
        self.assertEqual(tuple(buffer[3, 0]), (255, 0, 0, 255))
        self.assertEqual(tuple(buffer[0, 0]), (0, 0, 0, 0))
        self.assertEqual(tuple(buffer[3, 3]), (0, 0, 0, 0))

    def test_blend_half_alpha_over_white(self) -> None:
        buffer = new_canvas(1, 1, (255, 255, 255, 255))
        blend_mask(buffer, 0, 0, np.full((1, 1), 255, dtype=np.uint8), Color.BLACK.with_alpha(0.5))
        self.assertEqual(tuple(buffer[0, 0]), (127, 127, 127, 255))


class RasterCanvasTests(unittest.TestCase):
    def _canvas(self) -> RasterCanvas:
        return RasterCanvas.create(CanvasDescriptor(size=Size(40, 30), face_color=Color.WHITE))

    def test_face_color_fills_buffer(self) -> None:
        canvas = self._canvas()
        self.assertEqual(canvas.buffer.shape, (30, 40, 4))
        self.assertTrue(np.all(canvas.buffer == 255))

    def test_shape_is_drawn_y_up(self) -> None:
        canvas = self._canvas()
        canvas.draw_shape(
            ShapeDescriptor(point=Point(10.0, 5.0), shape=Circle(r=3), fill_color=Color.BLUE, line_width=0)
        )
        self.assertEqual(tuple(canvas.buffer[25, 10]), (0, 0, 255, 255))
        self.assertEqual(tuple(canvas.buffer[5, 10]), (255, 255, 255, 255))

    def test_line_curve_and_fill_mark_pixels(self) -> None:
        canvas = self._canvas()
        canvas.draw_line(LineDescriptor(p1=Point(0.0, 15.0), p2=Point(40.0, 15.0), line_width=2))
        self.assertTrue(np.any(canvas.buffer[14:17, 20, 0] == 0))
        canvas.draw_curve(CurveDescriptor(points=[Point(5.0, 0.0), Point(5.0, 30.0)], line_width=2))
        self.assertTrue(np.any(canvas.buffer[5, 4:7, 0] == 0))
        canvas.fill_region(
            FillDescriptor(points=[Point(30.0, 2.0), Point(38.0, 2.0), Point(38.0, 8.0)], fill_color=Color.GREEN)
        )
        self.assertEqual(tuple(canvas.buffer[26, 37]), (0, 255, 0, 255))

    def test_text_leaves_ink(self) -> None:
        canvas = self._canvas()
        canvas.draw_text(TextDescriptor(text="8", position=Point(20.0, 15.0)))
        self.assertTrue(np.any(canvas.buffer[:, :, 0] < 255))
        size = canvas.text_size(TextDescriptor(text="8"))
        self.assertGreater(size.width, 0)
        self.assertGreater(size.height, 0)

    def test_raster_canvas_rejects_svg(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(BackendError):
                self._canvas().save_file(Path(tmp) / "out.svg", FileFormat.SVG, 100)


class SvgCanvasTests(unittest.TestCase):
    def test_document_has_background_and_primitives(self) -> None:
        canvas = SvgCanvas.create(CanvasDescriptor(size=Size(40, 30), image_format=ImageFormat.SVG))
        clip = Area(0, 20, 0, 10)
        canvas.draw_line(LineDescriptor(p1=Point(0.0, 0.0), p2=Point(40.0, 30.0), dashes=[4.0, 4.0]))
        canvas.draw_curve(CurveDescriptor(points=[Point(0.0, 0.0), Point(5.0, 5.0)], clip_area=clip))
        canvas.fill_region(
            FillDescriptor(points=[Point(0.0, 0.0), Point(5.0, 0.0), Point(5.0, 5.0)], clip_area=clip)
        )
        root = ET.fromstring(canvas.to_string())
        tags = [child.tag.split("}")[-1] for child in root]
        self.assertEqual(tags, ["defs", "rect", "line", "polyline", "polygon"])
        line = root[2]
        self.assertEqual(line.get("y1"), "30")
        self.assertEqual(line.get("y2"), "0")
        self.assertEqual(line.get("stroke-dasharray"), "4,4")
        # one clip path shared by both clipped elements
        self.assertEqual(len(root[0]), 1)
        self.assertEqual(root[3].get("clip-path"), root[4].get("clip-path"))

    def test_rotated_text_gets_transform(self) -> None:
        canvas = SvgCanvas.create(CanvasDescriptor(size=Size(40, 30), face_color=Color.TRANSPARENT))
        canvas.draw_text(TextDescriptor(text="label", position=Point(20.0, 15.0), rotation=0.5 * math.pi))
        root = ET.fromstring(canvas.to_string())
        text = [child for child in root if child.tag.endswith("text")][0]
        self.assertEqual(text.text, "label")
        self.assertTrue(text.get("transform").startswith("rotate(90 "))

    def test_svg_canvas_rejects_png(self) -> None:
        canvas = SvgCanvas.create(CanvasDescriptor(size=Size(10, 10)))
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(BackendError):
                canvas.save_file(Path(tmp) / "out.png", FileFormat.PNG, 100)


class FigureOutputTests(unittest.TestCase):
    def test_create_canvas_dispatches_on_image_format(self) -> None:
        self.assertIsInstance(create_canvas(CanvasDescriptor(size=Size(5, 5))), RasterCanvas)
        self.assertIsInstance(
            create_canvas(CanvasDescriptor(size=Size(5, 5), image_format=ImageFormat.SVG)), SvgCanvas
        )

    def test_to_rgba_matches_figure_size(self) -> None:
        frame = _small_figure().to_rgba()
        self.assertEqual(frame.shape, (150, 200, 4))
        self.assertEqual(frame.dtype, np.uint8)
        self.assertTrue(np.any(frame[:, :, :3] < 255))

    def test_rendering_is_deterministic(self) -> None:
        fig = _small_figure()
        self.assertTrue(np.array_equal(fig.to_rgba(), fig.to_rgba()))

    def test_draw_png_and_svg_files(self) -> None:
        fig = _small_figure()
        with tempfile.TemporaryDirectory() as tmp:
            png = Path(tmp) / "plot.png"
            svg = Path(tmp) / "plot.svg"
            fig.draw_file(png)
            fig.draw_file(svg)
            with Image.open(png) as image:
                self.assertEqual(image.size, (200, 150))
            root = ET.parse(svg).getroot()
            self.assertTrue(root.tag.endswith("svg"))
            self.assertEqual(root.get("width"), "200")


if __name__ == "__main__":
    unittest.main()
