import json
import pathlib

import pytest

import photo_package_sheet.config
import photo_package_sheet.packages


GEOMETRY = photo_package_sheet.config.DEFAULT_GEOMETRY
PACKAGE_IDS = photo_package_sheet.packages.PACKAGE_IDS
FIXTURES_DIR = pathlib.Path(__file__).resolve().parent / "fixtures"


#============================================
def _layout(package_id: str) -> photo_package_sheet.config.PackageLayout:
	return photo_package_sheet.packages.get_layout(package_id, GEOMETRY)


#============================================
def _line_on_cell_edge(
	line: photo_package_sheet.config.CutLine,
	cells: tuple[photo_package_sheet.config.Cell, ...],
) -> bool:
	"""
	Check whether a cut line runs along at least one cell edge.

	Args:
		line: Cut line.
		cells: Layout cells.

	Returns:
		True if the line shares a stretch of some cell's edge.
	"""
	for cell in cells:
		box = cell.outer
		if line.x1 == line.x2:
			if line.x1 not in (box.x, box.right):
				continue
			low = max(min(line.y1, line.y2), box.y)
			high = min(max(line.y1, line.y2), box.bottom)
		else:
			if line.y1 not in (box.y, box.bottom):
				continue
			low = max(min(line.x1, line.x2), box.x)
			high = min(max(line.x1, line.x2), box.right)
		if high > low:
			return True
	return False


#============================================
@pytest.mark.parametrize("package_id", list(PACKAGE_IDS))
def test_cells_within_sheet(package_id: str) -> None:
	"""
	Ensure every cell, name strip included, lies on the sheet.
	"""
	layout = _layout(package_id)
	for cell in layout.cells:
		assert photo_package_sheet.packages.rect_within_bounds(
			cell.outer,
			GEOMETRY.paper_width,
			GEOMETRY.paper_height,
		)


#============================================
@pytest.mark.parametrize("package_id", list(PACKAGE_IDS))
def test_cells_do_not_overlap(package_id: str) -> None:
	"""
	Ensure no two cells share any area.
	"""
	cells = _layout(package_id).cells
	for index, cell in enumerate(cells):
		for other in cells[index + 1:]:
			assert not photo_package_sheet.packages.rects_overlap(cell.outer, other.outer)


#============================================
@pytest.mark.parametrize("package_id", list(PACKAGE_IDS))
def test_cut_lines_follow_cell_edges(package_id: str) -> None:
	"""
	Ensure cut lines are axis aligned and trace cell boundaries.
	"""
	layout = _layout(package_id)
	assert layout.cut_lines
	for line in layout.cut_lines:
		assert line.x1 == line.x2 or line.y1 == line.y2
		assert _line_on_cell_edge(line, layout.cells), line
		for x_value in (line.x1, line.x2):
			assert 0 <= x_value <= GEOMETRY.paper_width
		for y_value in (line.y1, line.y2):
			assert 0 <= y_value <= GEOMETRY.paper_height


#============================================
def test_layouts_match_baseline() -> None:
	"""
	Compare cell counts, cut line counts, and block bounds to the baseline.
	"""
	baseline = json.loads((FIXTURES_DIR / "layout_baseline.json").read_text(encoding="utf-8"))
	assert sorted(baseline) == list(PACKAGE_IDS)
	for package_id in PACKAGE_IDS:
		layout = _layout(package_id)
		expected = baseline[package_id]
		bounds = photo_package_sheet.packages.layout_bounds(layout)
		assert len(layout.cells) == expected["cells"], package_id
		assert len(layout.cut_lines) == expected["cut_lines"], package_id
		assert layout.has_label == expected["has_label"], package_id
		assert bounds.x == expected["bounds"]["x"], package_id
		assert bounds.y == expected["bounds"]["y"], package_id
		assert bounds.width == expected["bounds"]["width"], package_id
		assert bounds.height == expected["bounds"]["height"], package_id


# every guide segment as (x1, y1, x2, y2)
EXPECTED_CUT_LINES = {
	"A": [
		(600, 0, 600, 1200),
		(0, 600, 1200, 600),
		(0, 1200, 1200, 1200),
		(300, 1200, 300, 1500),
		(600, 1200, 600, 1500),
		(900, 1200, 900, 1500),
		(0, 1500, 1200, 1500),
	],
	"B": [
		(0, 300, 1200, 300),
		(0, 600, 1200, 600),
		(0, 900, 1200, 900),
		(300, 0, 300, 600),
		(600, 0, 600, 600),
		(900, 0, 900, 600),
		(300, 600, 300, 900),
		(600, 600, 600, 900),
		(900, 600, 900, 900),
	],
	"C": [
		(600, 0, 600, 1800),
		(0, 600, 1200, 600),
		(0, 1200, 1200, 1200),
	],
	"E": [
		(600, 300, 600, 900),
		(0, 900, 1200, 900),
		(0, 1200, 1200, 1200),
		(0, 1500, 1200, 1500),
		(300, 900, 300, 1500),
		(600, 900, 600, 1500),
		(900, 900, 900, 1500),
		(0, 300, 1200, 300),
		(0, 1500, 1200, 1500),
	],
	"G": [
		(0, 300, 1200, 300),
		(0, 1500, 1200, 1500),
		(900, 300, 900, 1500),
		(900, 600, 1200, 600),
		(900, 900, 1200, 900),
		(900, 1200, 1200, 1200),
		(1200, 300, 1200, 1500),
	],
	"H": [
		(0, 300, 1200, 300),
		(0, 1500, 1200, 1500),
		(0, 600, 1200, 600),
		(0, 1200, 1200, 1200),
		(300, 300, 300, 600),
		(600, 300, 600, 600),
		(900, 300, 900, 600),
		(600, 600, 600, 1200),
		(300, 1200, 300, 1500),
		(600, 1200, 600, 1500),
		(900, 1200, 900, 1500),
	],
}


#============================================
@pytest.mark.parametrize("package_id", sorted(EXPECTED_CUT_LINES))
def test_cut_line_segments_exact(package_id: str) -> None:
	"""
	Compare every guide segment of the grid packages, duplicates included.
	"""
	layout = _layout(package_id)
	actual = sorted((line.x1, line.y1, line.x2, line.y2) for line in layout.cut_lines)
	assert actual == sorted(EXPECTED_CUT_LINES[package_id])


#============================================
def test_package_c_fills_sheet() -> None:
	"""
	Package C is six 600 px squares in 2 columns x 3 rows with 3 cut lines.
	"""
	layout = _layout("C")
	assert len(layout.cells) == 6
	assert all((cell.width, cell.height) == (600, 600) for cell in layout.cells)
	area = sum(cell.width * cell.height for cell in layout.cells)
	assert area == GEOMETRY.paper_width * GEOMETRY.paper_height
	verticals = [line for line in layout.cut_lines if line.x1 == line.x2]
	horizontals = [line for line in layout.cut_lines if line.y1 == line.y2]
	assert len(verticals) == 1
	assert (verticals[0].y1, verticals[0].y2) == (0, 1800)
	assert len(horizontals) == 2
	assert all((line.x1, line.x2) == (0, 1200) for line in horizontals)


#============================================
def test_package_b_last_row_centered() -> None:
	"""
	Package B rows 0-1 fill four columns; row 2 uses columns 1 and 2.
	"""
	cells = _layout("B").cells
	assert len(cells) == 10
	for row in range(2):
		row_cells = [cell for cell in cells if cell.y == row * 300]
		assert [cell.x for cell in row_cells] == [0, 300, 600, 900]
	last_row = [cell for cell in cells if cell.y == 600]
	assert [cell.x for cell in last_row] == [300, 600]


#============================================
def test_package_a_sections() -> None:
	"""
	Package A has four 2x2 on top and four 1x1 starting at y=1200.
	"""
	cells = _layout("A").cells
	large = [cell for cell in cells if cell.width == 600]
	small = [cell for cell in cells if cell.width == 300]
	assert len(large) == 4
	assert len(small) == 4
	assert all(cell.y == 1200 for cell in small)
	assert [cell.x for cell in small] == [0, 300, 600, 900]


#============================================
@pytest.mark.parametrize("package_id,rows", [("D", 3), ("F", 2)])
def test_passport_cells(package_id: str, rows: int) -> None:
	"""
	Passport cells share one height and the block is centered on the sheet.
	"""
	layout = _layout(package_id)
	assert layout.has_label
	assert layout.border_px == GEOMETRY.border_px
	assert len(layout.cells) == 2 * rows
	heights = {cell.outer.height for cell in layout.cells}
	assert heights == {GEOMETRY.cell_height}
	for cell in layout.cells:
		assert (cell.width, cell.height) == (413, 531)
		assert cell.label_area.y == cell.y + 531
		assert cell.label_area.height == 69
		assert not photo_package_sheet.packages.rects_overlap(cell.photo, cell.label_area)
	bounds = photo_package_sheet.packages.layout_bounds(layout)
	assert bounds.x == 187
	assert bounds.y == round((1800 - rows * 600) / 2)


#============================================
@pytest.mark.parametrize("package_id", ["D", "F"])
def test_passport_cut_lines_trace_outer_boxes(package_id: str) -> None:
	"""
	Each passport cell gets exactly its four outer edges as cut lines.
	"""
	layout = _layout(package_id)
	expected = []
	for cell in layout.cells:
		expected.extend(photo_package_sheet.packages.cell_outline(cell.outer))
	assert list(layout.cut_lines) == expected
	for cell in layout.cells:
		inner_y = cell.label_area.y
		for line in layout.cut_lines:
			if line.y1 == line.y2 and line.x1 == cell.x:
				assert line.y1 != inner_y


#============================================
def test_package_g_large_cell() -> None:
	"""
	Package G puts a 900x1200 cell on the left and four 1x1 to its right.
	"""
	cells = _layout("G").cells
	assert cells[0] == photo_package_sheet.config.Cell(0, 300, 900, 1200)
	assert [(cell.x, cell.y) for cell in cells[1:]] == [(900, 300), (900, 600), (900, 900), (900, 1200)]


#============================================
@pytest.mark.parametrize("package_id", ["E", "G", "H"])
def test_vertically_centered_blocks(package_id: str) -> None:
	bounds = photo_package_sheet.packages.layout_bounds(_layout(package_id))
	assert bounds.y == GEOMETRY.paper_height - bounds.bottom


#============================================
def test_package_h_is_symmetric() -> None:
	"""
	Package H mirrors its top and bottom rows.
	"""
	cells = _layout("H").cells
	top = [cell for cell in cells if cell.y == 300]
	bottom = [cell for cell in cells if cell.y == 1200]
	assert [cell.x for cell in top] == [cell.x for cell in bottom] == [0, 300, 600, 900]
	middle = [cell for cell in cells if cell.y == 600]
	assert [(cell.x, cell.width) for cell in middle] == [(0, 600), (600, 600)]


#============================================
@pytest.mark.parametrize("package_id", ["Z", "", "AB", "a", " D ", "h\n", None, 1])
def test_unknown_package_raises(package_id: object) -> None:
	"""
	Identifiers other than exactly A through H raise the package error.
	"""
	with pytest.raises(photo_package_sheet.packages.UnknownPackageError) as info:
		photo_package_sheet.packages.get_layout(package_id, GEOMETRY)
	assert isinstance(info.value, ValueError)
	assert "Unknown package" in str(info.value)


#============================================
def test_package_info_covers_registry() -> None:
	assert sorted(photo_package_sheet.packages.PACKAGE_INFO) == list(PACKAGE_IDS)
	assert sorted(photo_package_sheet.packages.LAYOUT_REGISTRY) == list(PACKAGE_IDS)
