"""
Sheet rendering: cover-fit crops, name labels, borders, and cut guides.
"""

# Standard Library
import functools
import math
import typing

# PIP3 modules
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont

# local repo modules
import photo_package_sheet as pps
import photo_package_sheet.config
import photo_package_sheet.packages


CutLine = pps.config.CutLine
Rect = pps.config.Rect
PackageLayout = pps.config.PackageLayout
SheetGeometry = pps.config.SheetGeometry
SheetResult = pps.config.SheetResult

DEFAULT_GEOMETRY = pps.config.DEFAULT_GEOMETRY
BACKGROUND_COLOR = pps.config.BACKGROUND_COLOR
BORDER_COLOR = pps.config.BORDER_COLOR
CUT_LINE_COLOR = pps.config.CUT_LINE_COLOR
CUT_LINE_ALPHA = pps.config.CUT_LINE_ALPHA
CUT_LINE_WIDTH = pps.config.CUT_LINE_WIDTH
CUT_LINE_DASH = pps.config.CUT_LINE_DASH
LABEL_TEXT_COLOR = pps.config.LABEL_TEXT_COLOR
LABEL_FONT_RATIO = pps.config.LABEL_FONT_RATIO
LABEL_FONT_MIN_SIZE = pps.config.LABEL_FONT_MIN_SIZE
LABEL_FONT_STEP = pps.config.LABEL_FONT_STEP
LABEL_TEXT_PADDING = pps.config.LABEL_TEXT_PADDING
LABEL_FONT_CANDIDATES = pps.config.LABEL_FONT_CANDIDATES
round_half_up = pps.config.round_half_up

MeasureFunc = typing.Callable[[str, int], float]


#============================================
def compute_cover_crop(
	source_width: float,
	source_height: float,
	dest_width: float,
	dest_height: float,
) -> tuple[float, float, float, float]:
	"""
	Select the centered source region that covers a destination rect.

	The region has the destination aspect ratio, so scaling it to the
	destination fills it with no letterboxing and no distortion.

	Args:
		source_width: Source image width.
		source_height: Source image height.
		dest_width: Destination rect width.
		dest_height: Destination rect height.

	Returns:
		Tuple of (sx, sy, sw, sh) in source pixels.
	"""
	source_ratio = source_width / source_height
	dest_ratio = dest_width / dest_height
	if source_ratio > dest_ratio:
		crop_height = float(source_height)
		crop_width = crop_height * dest_ratio
		crop_x = (source_width - crop_width) / 2.0
		crop_y = 0.0
	else:
		crop_width = float(source_width)
		crop_height = crop_width / dest_ratio
		crop_x = 0.0
		crop_y = (source_height - crop_height) / 2.0
	return (crop_x, crop_y, crop_width, crop_height)


#============================================
def crop_cover_tile(source: PIL.Image.Image, width: int, height: int) -> PIL.Image.Image:
	"""
	Crop and scale the source into a new width x height tile.

	Args:
		source: Prepared RGB source image.
		width: Tile width.
		height: Tile height.

	Returns:
		New RGB image; the source is left untouched.
	"""
	crop_x, crop_y, crop_width, crop_height = compute_cover_crop(
		source.width,
		source.height,
		width,
		height,
	)
	box = (crop_x, crop_y, crop_x + crop_width, crop_y + crop_height)
	return source.resize((width, height), resample=PIL.Image.Resampling.LANCZOS, box=box)


#============================================
def iter_dash_segments(
	line: CutLine,
	pattern: tuple[int, int] = CUT_LINE_DASH,
) -> typing.Iterator[tuple[float, float, float, float]]:
	"""
	Split a line into its visible dashes.

	The pattern restarts at the first point of every line. Each dash covers
	the half-open span [start, start + dash) along the line, so its end point
	is the last covered pixel, as Pillow draws both end points of a line.

	Args:
		line: Cut line.
		pattern: Tuple of (dash, gap) lengths in pixels.

	Yields:
		Tuples of (x1, y1, x2, y2) for each dash, end point inclusive.
	"""
	dash, gap = pattern
	delta_x = line.x2 - line.x1
	delta_y = line.y2 - line.y1
	length = math.hypot(delta_x, delta_y)
	if length <= 0.0 or dash <= 0:
		return
	unit_x = delta_x / length
	unit_y = delta_y / length
	position = 0.0
	while position < length:
		end = max(position, min(position + dash, length) - 1.0)
		yield (
			line.x1 + unit_x * position,
			line.y1 + unit_y * position,
			line.x1 + unit_x * end,
			line.y1 + unit_y * end,
		)
		position += dash + gap


#============================================
def draw_cut_lines(sheet: PIL.Image.Image, lines: typing.Iterable[CutLine]) -> None:
	"""
	Overlay dashed, translucent gray cut guides on the sheet.

	Args:
		sheet: Destination sheet.
		lines: Cut lines to draw.
	"""
	draw = PIL.ImageDraw.Draw(sheet, "RGBA")
	fill = CUT_LINE_COLOR + (round_half_up(255 * CUT_LINE_ALPHA),)
	for line in lines:
		for x1, y1, x2, y2 in iter_dash_segments(line):
			draw.line([(x1, y1), (x2, y2)], fill=fill, width=CUT_LINE_WIDTH)


#============================================
@functools.lru_cache(maxsize=64)
def load_label_font(size: int) -> PIL.ImageFont.FreeTypeFont:
	"""
	Load the bold sans font used for name labels.

	Args:
		size: Font size in pixels.

	Returns:
		Pillow font.
	"""
	for font_name in LABEL_FONT_CANDIDATES:
		try:
			return PIL.ImageFont.truetype(font_name, size)
		except OSError:
			continue
	return PIL.ImageFont.load_default(size=size)


#============================================
def measure_label_text(text: str, size: int) -> float:
	return load_label_font(size).getlength(text)


#============================================
def choose_label_font_size(
	text: str,
	area_width: int,
	area_height: int,
	measure: MeasureFunc = measure_label_text,
) -> int:
	"""
	Pick the label font size, shrinking long names until they fit.

	Starts at 52% of the strip height and steps down by 2 until the text
	fits the strip width minus padding or the floor size is reached. Text
	still too wide at the floor is drawn anyway.

	Args:
		text: Text to measure, already upper-cased.
		area_width: Label strip width.
		area_height: Label strip height.
		measure: Callable returning the rendered width of text at a size.

	Returns:
		Font size in pixels.
	"""
	size = round_half_up(area_height * LABEL_FONT_RATIO)
	max_width = area_width - LABEL_TEXT_PADDING
	max_steps = max(0, (size - LABEL_FONT_MIN_SIZE) // LABEL_FONT_STEP) + 1
	for _ in range(max_steps):
		if size <= LABEL_FONT_MIN_SIZE:
			break
		if measure(text, size) <= max_width:
			break
		size -= LABEL_FONT_STEP
	return size


#============================================
def format_label_text(name: str | None) -> str:
	if not name:
		return ""
	return name.strip().upper()


#============================================
def draw_label(
	sheet: PIL.Image.Image,
	text: str,
	area: Rect,
	font_size: int | None = None,
) -> int | None:
	"""
	Paint the white name strip and the centered, upper-cased name.

	Args:
		sheet: Destination sheet.
		text: Name text, any case.
		area: Label strip below the photo.
		font_size: Precomputed size, chosen from the text when None.

	Returns:
		Font size used, or None when nothing was written.
	"""
	draw = PIL.ImageDraw.Draw(sheet)
	draw.rectangle(
		[area.x, area.y, area.right - 1, area.bottom - 1],
		fill=BACKGROUND_COLOR,
	)
	display = format_label_text(text)
	if not display:
		return None
	if font_size is None:
		font_size = choose_label_font_size(display, area.width, area.height)
	font = load_label_font(font_size)
	center_x = area.x + area.width / 2.0
	center_y = area.y + area.height / 2.0
	draw.text((center_x, center_y), display, font=font, fill=LABEL_TEXT_COLOR, anchor="mm")
	return font_size


#============================================
def draw_cell_border(sheet: PIL.Image.Image, rect: Rect, border_px: int) -> None:
	"""
	Draw a border just inside rect, border_px wide.
	"""
	if border_px <= 0:
		return
	draw = PIL.ImageDraw.Draw(sheet)
	draw.rectangle(
		[rect.x, rect.y, rect.right - 1, rect.bottom - 1],
		outline=BORDER_COLOR,
		width=border_px,
	)


#============================================
def prepare_source_image(image: PIL.Image.Image) -> PIL.Image.Image:
	"""
	Get an RGB view of the source, flattening transparency onto white.

	Args:
		image: Decoded source image.

	Returns:
		RGB image; a new object whenever a conversion is needed.
	"""
	if image.width <= 0 or image.height <= 0:
		raise ValueError(f"source image has no area: {image.width}x{image.height}")
	has_alpha = image.mode in ("RGBA", "LA", "PA") or (
		image.mode == "P" and "transparency" in image.info
	)
	if has_alpha:
		rgba = image.convert("RGBA")
		background = PIL.Image.new("RGBA", rgba.size, BACKGROUND_COLOR + (255,))
		return PIL.Image.alpha_composite(background, rgba).convert("RGB")
	if image.mode != "RGB":
		return image.convert("RGB")
	return image


#============================================
def render_layout(
	source: PIL.Image.Image,
	layout: PackageLayout,
	name: str = "",
	geometry: SheetGeometry = DEFAULT_GEOMETRY,
	draw_guides: bool = True,
) -> tuple[PIL.Image.Image, int | None]:
	"""
	Draw a layout onto a fresh white sheet.

	Each distinct cell size gets its own cover crop; cells of the same
	size share the tile. Cut guides go on last so they sit over photos.

	Args:
		source: Decoded source image.
		layout: Package layout.
		name: Name for the label strips; ignored when the layout has none.
		geometry: Sheet geometry.
		draw_guides: Whether to draw cut guides.

	Returns:
		Tuple of (sheet, label_font_size).
	"""
	prepared = prepare_source_image(source)
	sheet = PIL.Image.new("RGB", (geometry.paper_width, geometry.paper_height), BACKGROUND_COLOR)

	display = format_label_text(name) if layout.has_label else ""
	font_size = None
	if display:
		first_area = layout.cells[0].label_area
		font_size = choose_label_font_size(display, first_area.width, first_area.height)

	tiles: dict[tuple[int, int], PIL.Image.Image] = {}
	for cell in layout.cells:
		photo = cell.photo
		tile_key = (photo.width, photo.height)
		if tile_key not in tiles:
			tiles[tile_key] = crop_cover_tile(prepared, photo.width, photo.height)
		sheet.paste(tiles[tile_key], (photo.x, photo.y))
		label_area = cell.label_area
		if layout.has_label and label_area is not None:
			draw_label(sheet, display, label_area, font_size)
		draw_cell_border(sheet, cell.outer, layout.border_px)

	if draw_guides:
		draw_cut_lines(sheet, layout.cut_lines)
	return (sheet, font_size)


#============================================
def compose_sheet(
	package_id: str,
	source: PIL.Image.Image,
	name: str = "",
	geometry: SheetGeometry = DEFAULT_GEOMETRY,
	draw_guides: bool = True,
) -> tuple[PIL.Image.Image, SheetResult]:
	"""
	Resolve the package and render it, returning the sheet and its record.

	Args:
		package_id: Package identifier, A through H.
		source: Decoded source image.
		name: Name for passport label strips.
		geometry: Sheet geometry.
		draw_guides: Whether to draw cut guides.

	Returns:
		Tuple of (sheet, SheetResult).
	"""
	layout = pps.packages.get_layout(package_id, geometry)
	sheet, font_size = render_layout(source, layout, name, geometry, draw_guides)
	label_text = format_label_text(name) if layout.has_label else ""
	result = SheetResult(
		package_id=layout.package_id,
		layout=layout,
		geometry=geometry,
		source_size=(source.width, source.height),
		label_text=label_text,
		label_font_size=font_size,
	)
	return (sheet, result)


#============================================
def generate_package(
	package_id: str,
	source: PIL.Image.Image,
	name: str = "",
	geometry: SheetGeometry = DEFAULT_GEOMETRY,
	draw_guides: bool = True,
) -> PIL.Image.Image:
	"""
	Render one photo package sheet.

	Args:
		package_id: Package identifier, A through H.
		source: Decoded source image; not modified.
		name: Name for passport packages D and F.
		geometry: Sheet geometry.
		draw_guides: Whether to draw cut guides.

	Returns:
		New RGB sheet image.

	Raises:
		UnknownPackageError: If package_id is not A through H.
	"""
	sheet, _result = compose_sheet(package_id, source, name, geometry, draw_guides)
	return sheet
