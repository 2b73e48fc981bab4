import os
import tempfile
import unittest

from config import CFG
from io_files import coords_text, write_coords, write_layout_view_html
from models import Board, PlacedPiece


def _piece(x=0, y=0):
    return PlacedPiece(id="placed-1", template_id="piece-1", name="Shelf",
                       width=500, height=300, x=x, y=y, color="hsl(1 65% 60%)")


class WriteOutputsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self._orig_coords = CFG.COORDS_OUT
        self._orig_layout = CFG.LAYOUT_HTML
        self.board = Board("plate-a", "Chapa A", 2750, 1840)

    def tearDown(self) -> None:
        CFG.COORDS_OUT = self._orig_coords
        CFG.LAYOUT_HTML = self._orig_layout

    def test_write_coords_uses_configured_relative_path(self) -> None:
        CFG.COORDS_OUT = "outputs/custom_coords.txt"

        path = write_coords([_piece(10, 20)], self.board, self.tmpdir.name)

        expected = os.path.join(self.tmpdir.name, "outputs", "custom_coords.txt")
        self.assertEqual(path, expected)
        self.assertTrue(os.path.exists(path))

        with open(path, "r", encoding="utf-8") as fh:
            contents = fh.read()
        self.assertIn("# Chapa A 2750x1840", contents)
        self.assertIn("Shelf @ (10,20) size (500×300)", contents)

    def test_write_layout_view_html_accepts_absolute_path(self) -> None:
        target = os.path.join(self.tmpdir.name, "html", "layout.html")
        CFG.LAYOUT_HTML = target

        svg = "<svg></svg>"
        legend = "<li>Shelf</li>"

        path = write_layout_view_html(svg, legend, self.tmpdir.name, title="Chapa <A>")

        self.assertEqual(path, target)
        with open(path, "r", encoding="utf-8") as fh:
            contents = fh.read()
        self.assertIn(svg, contents)
        self.assertIn(legend, contents)
        self.assertIn("Chapa &lt;A&gt;", contents)

    def test_coords_text_without_pieces(self) -> None:
        self.assertEqual(coords_text([], None), "No pieces placed\n")


if __name__ == "__main__":
    unittest.main()
