"""
Shared configuration, geometry constants, and layout data types.
"""

# Standard Library
import dataclasses
import math


DPI = 300
MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0
PAPER_WIDTH_IN = 4.0
PAPER_HEIGHT_IN = 6.0

PASSPORT_WIDTH_MM = 35.0
PASSPORT_HEIGHT_MM = 45.0
PASSPORT_ROWS_FOR_NAME_HEIGHT = 3
BORDER_MM = 0.5

BACKGROUND_COLOR = (255, 255, 255)
BORDER_COLOR = (0, 0, 0)

CUT_LINE_COLOR = (180, 180, 180)
CUT_LINE_ALPHA = 0.8
CUT_LINE_WIDTH = 3
CUT_LINE_DASH = (18, 12)

LABEL_TEXT_COLOR = (17, 17, 17)
LABEL_FONT_RATIO = 0.52
LABEL_FONT_MIN_SIZE = 18
LABEL_FONT_STEP = 2
LABEL_TEXT_PADDING = 20
LABEL_FONT_CANDIDATES = (
	"DejaVuSans-Bold.ttf",
	"Arial Bold.ttf",
	"arialbd.ttf",
	"LiberationSans-Bold.ttf",
	"FreeSansBold.ttf",
)

MAX_NAME_LENGTH = 60


#============================================
def round_half_up(value: float) -> int:
	"""
	Round to the nearest integer with halves going up.

	Python's round() rounds halves to even, which would shift some
	pixel edges by one compared to the published layouts.

	Args:
		value: Value to round.

	Returns:
		Rounded integer.
	"""
	return int(math.floor(value + 0.5))


#============================================
def mm_to_px(value: float, dpi: int = DPI) -> float:
	"""
	Convert millimeters to (unrounded) pixels.
	"""
	return value * dpi / MM_PER_INCH


#============================================
def inches_to_px(value: float, dpi: int = DPI) -> int:
	"""
	Convert inches to whole pixels.
	"""
	return round_half_up(value * dpi)


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


@dataclasses.dataclass(frozen=True)
class SheetGeometry:
	dpi: int
	px_per_mm: float
	paper_width: int
	paper_height: int
	s1: int
	s2: int
	passport_width: int
	passport_height: int
	name_height: int
	cell_height: int
	border_px: int
	paper_width_in: float
	paper_height_in: float


#============================================
def build_geometry(
	dpi: int = DPI,
	paper_width_in: float = PAPER_WIDTH_IN,
	paper_height_in: float = PAPER_HEIGHT_IN,
) -> SheetGeometry:
	"""
	Derive every pixel measurement used by the layouts.

	The name strip height splits the space left under three passport rows,
	and both passport packages share it so their cells match.

	Args:
		dpi: Output resolution.
		paper_width_in: Sheet width in inches.
		paper_height_in: Sheet height in inches.

	Returns:
		SheetGeometry.
	"""
	if dpi <= 0:
		raise ValueError(f"dpi must be positive, got {dpi}")
	paper_width = inches_to_px(paper_width_in, dpi)
	paper_height = inches_to_px(paper_height_in, dpi)
	passport_width = round_half_up(mm_to_px(PASSPORT_WIDTH_MM, dpi))
	passport_height = round_half_up(mm_to_px(PASSPORT_HEIGHT_MM, dpi))
	rows = PASSPORT_ROWS_FOR_NAME_HEIGHT
	name_height = round_half_up((paper_height - rows * passport_height) / rows)
	return SheetGeometry(
		dpi=dpi,
		px_per_mm=dpi / MM_PER_INCH,
		paper_width=paper_width,
		paper_height=paper_height,
		s1=inches_to_px(1, dpi),
		s2=inches_to_px(2, dpi),
		passport_width=passport_width,
		passport_height=passport_height,
		name_height=name_height,
		cell_height=passport_height + name_height,
		border_px=round_half_up(mm_to_px(BORDER_MM, dpi)),
		paper_width_in=paper_width_in,
		paper_height_in=paper_height_in,
	)


DEFAULT_GEOMETRY = build_geometry()


@dataclasses.dataclass(frozen=True)
class Rect:
	x: int
	y: int
	width: int
	height: int

	@property
	def right(self) -> int:
		return self.x + self.width

	@property
	def bottom(self) -> int:
		return self.y + self.height


@dataclasses.dataclass(frozen=True)
class CutLine:
	x1: float
	y1: float
	x2: float
	y2: float


@dataclasses.dataclass(frozen=True)
class Cell:
	"""
	Destination of one photo crop, plus an optional name strip below it.
	"""
	x: int
	y: int
	width: int
	height: int
	label_height: int = 0

	@property
	def photo(self) -> Rect:
		return Rect(self.x, self.y, self.width, self.height)

	@property
	def label_area(self) -> Rect | None:
		if self.label_height <= 0:
			return None
		return Rect(self.x, self.y + self.height, self.width, self.label_height)

	@property
	def outer(self) -> Rect:
		return Rect(self.x, self.y, self.width, self.height + self.label_height)


@dataclasses.dataclass(frozen=True)
class PackageLayout:
	package_id: str
	cells: tuple[Cell, ...]
	cut_lines: tuple[CutLine, ...]
	has_label: bool
	border_px: int = 0


@dataclasses.dataclass(frozen=True)
class PackageInfo:
	package_id: str
	name: str
	subtitle: str
	specs: tuple[str, ...]


@dataclasses.dataclass
class SheetResult:
	package_id: str
	layout: PackageLayout
	geometry: SheetGeometry
	source_size: tuple[int, int]
	label_text: str
	label_font_size: int | None
