"""
Package layouts: cell rectangles and cut guides for packages A through H.
"""

# Standard Library
import typing

# local repo modules
import photo_package_sheet as pps
import photo_package_sheet.config


Cell = pps.config.Cell
CutLine = pps.config.CutLine
Rect = pps.config.Rect
PackageInfo = pps.config.PackageInfo
PackageLayout = pps.config.PackageLayout
SheetGeometry = pps.config.SheetGeometry

DEFAULT_GEOMETRY = pps.config.DEFAULT_GEOMETRY
round_half_up = pps.config.round_half_up

PACKAGE_IDS = "ABCDEFGH"
PASSPORT_PACKAGES = ("D", "F")


class UnknownPackageError(ValueError):
	"""
	Raised when a package identifier is not one of A through H.
	"""

	def __init__(self, package_id: object):
		super().__init__(f"Unknown package: {package_id}")
		self.package_id = package_id


PACKAGE_INFO = {
	"A": PackageInfo("A", "Package A", "Combination", ("4 pcs — 2×2 inch", "4 pcs — 1×1 inch")),
	"B": PackageInfo("B", "Package B", "1×1 inch", ("10 pcs — 1×1 inch",)),
	"C": PackageInfo("C", "Package C", "2×2 inch", ("6 pcs — 2×2 inch",)),
	"D": PackageInfo("D", "Package D", "Passport Size", ("6 pcs — 35×45 mm", "Name printed below")),
	"E": PackageInfo("E", "Package E", "Combination", ("2 pcs — 2×2 inch", "8 pcs — 1×1 inch")),
	"F": PackageInfo("F", "Package F", "Passport Size", ("4 pcs — 35×45 mm", "Name printed below")),
	"G": PackageInfo("G", "Package G", "School Combo", ("1 pc — 3×4 inch", "4 pcs — 1×1 inch")),
	"H": PackageInfo(
		"H",
		"Package H",
		"Symmetric Combo",
		("4 pcs — 1×1 inch", "2 pcs — 2×2 inch", "4 pcs — 1×1 inch"),
	),
}


#============================================
def hline(x1: float, x2: float, y: float) -> CutLine:
	return CutLine(x1, y, x2, y)


#============================================
def vline(x: float, y1: float, y2: float) -> CutLine:
	return CutLine(x, y1, x, y2)


#============================================
def cell_outline(rect: Rect) -> list[CutLine]:
	"""
	Build the four edges of a rectangle as cut lines.

	Args:
		rect: Rectangle to trace.

	Returns:
		Top, bottom, left, and right edges.
	"""
	return [
		hline(rect.x, rect.right, rect.y),
		hline(rect.x, rect.right, rect.bottom),
		vline(rect.x, rect.y, rect.bottom),
		vline(rect.right, rect.y, rect.bottom),
	]


#============================================
def layout_package_a(geometry: SheetGeometry) -> PackageLayout:
	"""
	Four 2x2 in a 2x2 grid on top, four 1x1 in one row below.
	"""
	s1 = geometry.s1
	s2 = geometry.s2
	width = geometry.paper_width
	cells = []
	for index in range(4):
		col = index % 2
		row = index // 2
		cells.append(Cell(col * s2, row * s2, s2, s2))
	small_y = 2 * s2
	for index in range(4):
		cells.append(Cell(index * s1, small_y, s1, s1))

	cut_lines = [
		vline(s2, 0, 2 * s2),
		hline(0, width, s2),
		hline(0, width, 2 * s2),
		vline(s1, small_y, small_y + s1),
		vline(2 * s1, small_y, small_y + s1),
		vline(3 * s1, small_y, small_y + s1),
		hline(0, width, small_y + s1),
	]
	return PackageLayout("A", tuple(cells), tuple(cut_lines), has_label=False)


#============================================
def layout_package_b(geometry: SheetGeometry) -> PackageLayout:
	"""
	Ten 1x1 as 4 + 4 + 2, the last two sitting in columns 1 and 2.
	"""
	s1 = geometry.s1
	width = geometry.paper_width
	cells = []
	for index in range(10):
		if index < 8:
			x = (index % 4) * s1
			y = (index // 4) * s1
		else:
			x = (index - 8 + 1) * s1
			y = 2 * s1
		cells.append(Cell(x, y, s1, s1))

	cut_lines = [
		hline(0, width, s1),
		hline(0, width, 2 * s1),
		hline(0, width, 3 * s1),
	]
	for col in range(1, 4):
		cut_lines.append(vline(col * s1, 0, 2 * s1))
	for col in range(1, 4):
		cut_lines.append(vline(col * s1, 2 * s1, 3 * s1))
	return PackageLayout("B", tuple(cells), tuple(cut_lines), has_label=False)


#============================================
def layout_package_c(geometry: SheetGeometry) -> PackageLayout:
	"""
	Six 2x2 in two columns and three rows; fills a 4x6 sheet exactly.
	"""
	s2 = geometry.s2
	width = geometry.paper_width
	cells = [Cell((index % 2) * s2, (index // 2) * s2, s2, s2) for index in range(6)]
	cut_lines = [
		vline(s2, 0, geometry.paper_height),
		hline(0, width, s2),
		hline(0, width, 2 * s2),
	]
	return PackageLayout("C", tuple(cells), tuple(cut_lines), has_label=False)


#============================================
def build_passport_layout(
	package_id: str,
	geometry: SheetGeometry,
	rows: int,
) -> PackageLayout:
	"""
	Build a two-column passport grid centered on the sheet.

	Columns and rows touch each other so one cut separates two cells.
	Cut lines trace the outer box of every cell, photo and name strip
	together.

	Args:
		package_id: Package identifier.
		geometry: Sheet geometry.
		rows: Number of passport rows.

	Returns:
		PackageLayout.
	"""
	columns = 2
	photo_width = geometry.passport_width
	photo_height = geometry.passport_height
	cell_height = geometry.cell_height
	start_x = round_half_up((geometry.paper_width - columns * photo_width) / 2)
	start_y = round_half_up((geometry.paper_height - rows * cell_height) / 2)

	cells = []
	cut_lines = []
	for index in range(columns * rows):
		col = index % columns
		row = index // columns
		cell = Cell(
			start_x + col * photo_width,
			start_y + row * cell_height,
			photo_width,
			photo_height,
			label_height=geometry.name_height,
		)
		cells.append(cell)
		cut_lines.extend(cell_outline(cell.outer))
	return PackageLayout(
		package_id,
		tuple(cells),
		tuple(cut_lines),
		has_label=True,
		border_px=geometry.border_px,
	)


#============================================
def layout_package_d(geometry: SheetGeometry) -> PackageLayout:
	"""
	Six passport cells with names, 2 columns x 3 rows.
	"""
	return build_passport_layout("D", geometry, rows=3)


#============================================
def layout_package_e(geometry: SheetGeometry) -> PackageLayout:
	"""
	Two 2x2 side by side over two rows of four 1x1, centered vertically.
	"""
	s1 = geometry.s1
	s2 = geometry.s2
	width = geometry.paper_width
	total_height = s2 + 2 * s1
	start_y = round_half_up((geometry.paper_height - total_height) / 2)

	cells = [Cell(0, start_y, s2, s2), Cell(s2, start_y, s2, s2)]
	for index in range(8):
		col = index % 4
		row = index // 4
		cells.append(Cell(col * s1, start_y + s2 + row * s1, s1, s1))

	small_top = start_y + s2
	bottom = start_y + total_height
	cut_lines = [
		vline(s2, start_y, start_y + s2),
		hline(0, width, small_top),
		hline(0, width, small_top + s1),
		hline(0, width, small_top + 2 * s1),
		vline(s1, small_top, bottom),
		vline(2 * s1, small_top, bottom),
		vline(3 * s1, small_top, bottom),
		hline(0, width, start_y),
		hline(0, width, bottom),
	]
	return PackageLayout("E", tuple(cells), tuple(cut_lines), has_label=False)


#============================================
def layout_package_f(geometry: SheetGeometry) -> PackageLayout:
	"""
	Four passport cells with names, 2 columns x 2 rows.
	"""
	return build_passport_layout("F", geometry, rows=2)


#============================================
def layout_package_g(geometry: SheetGeometry) -> PackageLayout:
	"""
	One 3x4 on the left with a strip of four 1x1 on the right.
	"""
	s1 = geometry.s1
	width = geometry.paper_width
	large_width = 3 * geometry.dpi
	large_height = 4 * geometry.dpi
	start_y = round_half_up((geometry.paper_height - large_height) / 2)
	bottom = start_y + large_height

	cells = [Cell(0, start_y, large_width, large_height)]
	for index in range(4):
		cells.append(Cell(large_width, start_y + index * s1, s1, s1))

	cut_lines = [
		hline(0, width, start_y),
		hline(0, width, bottom),
		vline(large_width, start_y, bottom),
		hline(large_width, width, start_y + s1),
		hline(large_width, width, start_y + 2 * s1),
		hline(large_width, width, start_y + 3 * s1),
		vline(width, start_y, bottom),
	]
	return PackageLayout("G", tuple(cells), tuple(cut_lines), has_label=False)


#============================================
def layout_package_h(geometry: SheetGeometry) -> PackageLayout:
	"""
	Four 1x1, two 2x2, four 1x1 stacked as a symmetric block.
	"""
	s1 = geometry.s1
	s2 = geometry.s2
	width = geometry.paper_width
	total_height = s1 + s2 + s1
	start_y = round_half_up((geometry.paper_height - total_height) / 2)
	middle_y = start_y + s1
	lower_y = start_y + s1 + s2
	bottom = start_y + total_height

	cells = [Cell(index * s1, start_y, s1, s1) for index in range(4)]
	cells.append(Cell(0, middle_y, s2, s2))
	cells.append(Cell(s2, middle_y, s2, s2))
	cells.extend(Cell(index * s1, lower_y, s1, s1) for index in range(4))

	cut_lines = [
		hline(0, width, start_y),
		hline(0, width, bottom),
		hline(0, width, middle_y),
		hline(0, width, lower_y),
	]
	cut_lines.extend(vline(col * s1, start_y, middle_y) for col in range(1, 4))
	cut_lines.append(vline(s2, middle_y, lower_y))
	cut_lines.extend(vline(col * s1, lower_y, bottom) for col in range(1, 4))
	return PackageLayout("H", tuple(cells), tuple(cut_lines), has_label=False)


LAYOUT_REGISTRY: dict[str, typing.Callable[[SheetGeometry], PackageLayout]] = {
	"A": layout_package_a,
	"B": layout_package_b,
	"C": layout_package_c,
	"D": layout_package_d,
	"E": layout_package_e,
	"F": layout_package_f,
	"G": layout_package_g,
	"H": layout_package_h,
}


#============================================
def require_package_id(package_id: object) -> str:
	"""
	Check that an identifier is exactly one of A through H.

	Lookup is strict: "a" and " A " are not package identifiers.

	Args:
		package_id: Identifier to check.

	Returns:
		The identifier, unchanged.

	Raises:
		UnknownPackageError: If the identifier is not a known package.
	"""
	if not isinstance(package_id, str) or package_id not in LAYOUT_REGISTRY:
		raise UnknownPackageError(package_id)
	return package_id


#============================================
def get_layout(package_id: str, geometry: SheetGeometry = DEFAULT_GEOMETRY) -> PackageLayout:
	"""
	Compute the layout for one package.

	Args:
		package_id: Package identifier, A through H.
		geometry: Sheet geometry.

	Returns:
		PackageLayout.

	Raises:
		UnknownPackageError: If package_id is not A through H.
	"""
	layout_func = LAYOUT_REGISTRY[require_package_id(package_id)]
	return layout_func(geometry)


#============================================
def rects_overlap(rect_a: Rect, rect_b: Rect) -> bool:
	"""
	Check whether two rectangles share any area; touching edges do not count.
	"""
	left = max(rect_a.x, rect_b.x)
	right = min(rect_a.right, rect_b.right)
	top = max(rect_a.y, rect_b.y)
	bottom = min(rect_a.bottom, rect_b.bottom)
	return right > left and bottom > top


#============================================
def rect_within_bounds(rect: Rect, width: int, height: int) -> bool:
	return 0 <= rect.x and rect.right <= width and 0 <= rect.y and rect.bottom <= height


#============================================
def layout_bounds(layout: PackageLayout) -> Rect:
	"""
	Compute the bounding box of all cells in a layout.

	Args:
		layout: Package layout.

	Returns:
		Rect covering every cell, name strips included.
	"""
	boxes = [cell.outer for cell in layout.cells]
	x0 = min(box.x for box in boxes)
	y0 = min(box.y for box in boxes)
	x1 = max(box.right for box in boxes)
	y1 = max(box.bottom for box in boxes)
	return Rect(x0, y0, x1 - x0, y1 - y0)
