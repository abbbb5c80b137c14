"""
Photo decoding and sheet export: PNG, print-sized PDF, and manifest.
"""

# Standard Library
import dataclasses
import json
import pathlib

# PIP3 modules
import PIL.Image
import PIL.ImageOps
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import photo_package_sheet as pps
import photo_package_sheet.config
import photo_package_sheet.packages


SheetGeometry = pps.config.SheetGeometry
SheetResult = pps.config.SheetResult

DEFAULT_GEOMETRY = pps.config.DEFAULT_GEOMETRY
PACKAGE_INFO = pps.packages.PACKAGE_INFO
inches_to_points = pps.config.inches_to_points

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff", ".gif"}


#============================================
def load_source_image(path: pathlib.Path) -> PIL.Image.Image:
	"""
	Decode a photo fully into memory.

	EXIF orientation is applied so phone photos come out upright.

	Args:
		path: Image file path.

	Returns:
		Loaded PIL image.
	"""
	path = pathlib.Path(path)
	if not path.is_file():
		raise ValueError(f"photo not found: {path}")
	if path.suffix.lower() not in IMAGE_SUFFIXES:
		raise ValueError(f"unsupported photo type: {path.suffix or path.name}")
	try:
		with PIL.Image.open(path) as image:
			image.load()
			oriented = PIL.ImageOps.exif_transpose(image)
			if oriented is image:
				oriented = image.copy()
	except PIL.UnidentifiedImageError as error:
		raise ValueError(f"not a readable image: {path}") from error
	if oriented.width <= 0 or oriented.height <= 0:
		raise ValueError(f"photo has no area: {path}")
	return oriented


#============================================
def sanitize_token(value: str) -> str:
	"""
	Sanitize a string for filenames.

	Args:
		value: Input string.

	Returns:
		Lower-case string with runs of other characters turned into "-".
	"""
	result: list[str] = []
	for char in value.lower():
		if char.isascii() and char.isalnum():
			result.append(char)
		elif result and result[-1] != "-":
			result.append("-")
	sanitized = "".join(result).strip("-")
	if not sanitized:
		return "sheet"
	return sanitized


#============================================
def default_output_stem(package_id: str) -> str:
	"""
	Build the default file stem, such as "photo-package-a".
	"""
	info = PACKAGE_INFO[pps.packages.require_package_id(package_id)]
	return f"photo-{sanitize_token(info.name)}"


#============================================
def write_png(
	sheet: PIL.Image.Image,
	output_path: pathlib.Path,
	geometry: SheetGeometry = DEFAULT_GEOMETRY,
) -> None:
	"""
	Write the sheet as a lossless PNG tagged with its DPI.

	Args:
		sheet: Rendered sheet.
		output_path: PNG path.
		geometry: Sheet geometry.
	"""
	output_path = pathlib.Path(output_path)
	output_path.parent.mkdir(parents=True, exist_ok=True)
	sheet.save(str(output_path), format="PNG", dpi=(geometry.dpi, geometry.dpi))


#============================================
def write_print_pdf(
	sheet: PIL.Image.Image,
	output_path: pathlib.Path,
	geometry: SheetGeometry = DEFAULT_GEOMETRY,
) -> tuple[float, float]:
	"""
	Write a one-page PDF sized exactly to the paper, with no margins.

	The image fills the page, so one image pixel prints at 1/dpi inch.

	Args:
		sheet: Rendered sheet.
		output_path: PDF path.
		geometry: Sheet geometry.

	Returns:
		Page size in points as (width, height).
	"""
	output_path = pathlib.Path(output_path)
	output_path.parent.mkdir(parents=True, exist_ok=True)
	page_width = inches_to_points(geometry.paper_width_in)
	page_height = inches_to_points(geometry.paper_height_in)
	pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=(page_width, page_height))
	pdf.setTitle(output_path.stem)
	image_reader = reportlab.lib.utils.ImageReader(sheet)
	pdf.drawImage(
		image_reader,
		0,
		0,
		width=page_width,
		height=page_height,
		mask=None,
		preserveAspectRatio=False,
		anchor="sw",
	)
	pdf.showPage()
	pdf.save()
	return (page_width, page_height)


#============================================
def build_manifest(result: SheetResult, outputs: dict[str, str]) -> dict:
	"""
	Describe a rendered sheet as plain JSON-ready data.

	Args:
		result: Sheet result from rendering.
		outputs: Output file paths keyed by kind.

	Returns:
		Manifest dict.
	"""
	info = PACKAGE_INFO[result.package_id]
	layout = result.layout
	cells = []
	for cell in layout.cells:
		entry = {"photo": dataclasses.asdict(cell.photo)}
		label_area = cell.label_area
		if label_area is not None:
			entry["label"] = dataclasses.asdict(label_area)
		cells.append(entry)
	data = {
		"package": {
			"id": info.package_id,
			"name": info.name,
			"subtitle": info.subtitle,
			"specs": list(info.specs),
		},
		"source_size": list(result.source_size),
		"label_text": result.label_text,
		"label_font_size": result.label_font_size,
		"geometry": dataclasses.asdict(result.geometry),
		"cells": cells,
		"cut_lines": [dataclasses.asdict(line) for line in layout.cut_lines],
		"border_px": layout.border_px,
		"outputs": outputs,
	}
	return data


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	result: SheetResult,
	outputs: dict[str, str],
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		result: Sheet result from rendering.
		outputs: Output file paths keyed by kind.
	"""
	manifest_path = pathlib.Path(manifest_path)
	manifest_path.parent.mkdir(parents=True, exist_ok=True)
	data = build_manifest(result, outputs)
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True, ensure_ascii=False)
