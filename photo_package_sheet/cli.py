"""
CLI entry points for photo package sheets.
"""

# Standard Library
import argparse
import pathlib
import time

# local repo modules
import photo_package_sheet as pps
import photo_package_sheet.config
import photo_package_sheet.output
import photo_package_sheet.packages
import photo_package_sheet.render


DEFAULT_GEOMETRY = pps.config.DEFAULT_GEOMETRY
MAX_NAME_LENGTH = pps.config.MAX_NAME_LENGTH
PACKAGE_IDS = pps.packages.PACKAGE_IDS
PACKAGE_INFO = pps.packages.PACKAGE_INFO
PASSPORT_PACKAGES = pps.packages.PASSPORT_PACKAGES
UnknownPackageError = pps.packages.UnknownPackageError


#============================================
def build_parser() -> argparse.ArgumentParser:
	"""
	Build the argument parser.

	Returns:
		ArgumentParser.
	"""
	parser = argparse.ArgumentParser(
		description="Compose one photo into a 4x6 in, 300 DPI print package sheet.",
	)

	input_group = parser.add_argument_group("Input")
	input_group.add_argument("-i", "--input", dest="input_path", default=None, help="Photo file.")
	input_group.add_argument(
		"-p", "--package", dest="package_id", default=None,
		help=f"Package identifier, one of {', '.join(PACKAGE_IDS)}.",
	)
	input_group.add_argument(
		"-n", "--name", dest="name", default="",
		help="Name printed under passport photos (packages D and F).",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output PNG path.")
	output_group.add_argument("-f", "--pdf", dest="pdf_path", default=None, help="Also write a 4x6 in print PDF.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-g", "--guides", dest="draw_guides", action="store_true", help="Draw dashed cut guides.")
	behavior_group.add_argument("-G", "--no-guides", dest="draw_guides", action="store_false", help="Leave out cut guides.")
	behavior_group.add_argument(
		"-l", "--list-packages", dest="list_packages", action="store_true",
		help="List the available packages and exit.",
	)

	parser.set_defaults(
		draw_guides=True,
		list_packages=False,
	)
	return parser


#============================================
def normalize_package_arg(value: str) -> str:
	"""
	Normalize a command line package argument such as " d " to "D".

	Args:
		value: Raw argument.

	Returns:
		Package identifier, A through H.

	Raises:
		UnknownPackageError: If the argument names no package.
	"""
	return pps.packages.require_package_id(value.strip().upper())


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, sys.argv when None.

	Returns:
		Parsed argparse namespace.
	"""
	parser = build_parser()
	args = parser.parse_args(argv)
	if args.list_packages:
		return args
	if args.input_path is None:
		parser.error("the following arguments are required: -i/--input")
	if args.package_id is None:
		parser.error("the following arguments are required: -p/--package")
	try:
		args.package_id = normalize_package_arg(args.package_id)
	except UnknownPackageError as error:
		parser.error(str(error))
	return args


#============================================
def format_package_listing() -> str:
	"""
	Format the package table for --list-packages.
	"""
	lines = []
	for package_id in PACKAGE_IDS:
		info = PACKAGE_INFO[package_id]
		specs = "; ".join(info.specs)
		lines.append(f"{package_id}  {info.name} ({info.subtitle}): {specs}")
	return "\n".join(lines)


#============================================
def resolve_name(package_id: str, name: str) -> str:
	"""
	Apply the name rules: only passport packages use it, capped in length.

	Args:
		package_id: Normalized package identifier.
		name: Raw name from the command line.

	Returns:
		Name to render.
	"""
	if package_id not in PASSPORT_PACKAGES:
		if name.strip():
			print(f"Name ignored: package {package_id} has no name labels")
		return ""
	if len(name) > MAX_NAME_LENGTH:
		print(f"Name truncated to {MAX_NAME_LENGTH} characters")
		name = name[:MAX_NAME_LENGTH]
	return name


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Decode the photo, render the sheet, and write the requested outputs.

	Args:
		args: Parsed argparse namespace.
	"""
	if args.list_packages:
		print(format_package_listing())
		return

	package_id = args.package_id
	info = PACKAGE_INFO[package_id]
	input_path = pathlib.Path(args.input_path)
	output_path = args.output_path
	if output_path is None:
		output_path = input_path.parent / f"{pps.output.default_output_stem(package_id)}.png"
	output_path = pathlib.Path(output_path)

	print("Photo package sheet")
	print(f"Package: {info.name} ({info.subtitle})")
	print(f"Photo: {input_path}")
	print(f"Output PNG: {output_path}")
	if args.pdf_path:
		print(f"Output PDF: {args.pdf_path}")
	print(f"Cut guides: {args.draw_guides}")

	name = resolve_name(package_id, args.name)
	if package_id in PASSPORT_PACKAGES and not name.strip():
		print("Warning: no name given, label strips will be blank")

	start_time = time.perf_counter()
	source = pps.output.load_source_image(input_path)
	decode_end = time.perf_counter()
	print(f"Photo size: {source.width}x{source.height}")

	sheet, result = pps.render.compose_sheet(
		package_id,
		source,
		name,
		DEFAULT_GEOMETRY,
		args.draw_guides,
	)
	render_end = time.perf_counter()
	print(f"Cells drawn: {len(result.layout.cells)}")
	print(f"Cut lines drawn: {len(result.layout.cut_lines) if args.draw_guides else 0}")
	if result.label_text:
		print(f"Label: {result.label_text} (font size {result.label_font_size})")

	outputs = {"png": str(output_path)}
	pps.output.write_png(sheet, output_path, DEFAULT_GEOMETRY)
	if args.pdf_path:
		page_width, page_height = pps.output.write_print_pdf(sheet, pathlib.Path(args.pdf_path), DEFAULT_GEOMETRY)
		outputs["pdf"] = str(args.pdf_path)
		print(f"PDF page: {page_width:.0f}x{page_height:.0f} pt")
	if args.manifest_path:
		pps.output.write_manifest(pathlib.Path(args.manifest_path), result, outputs)
		print(f"Manifest written: {args.manifest_path}")
	write_end = time.perf_counter()

	print(
		"Timing: decode={:.2f}s render={:.2f}s write={:.2f}s total={:.2f}s".format(
			decode_end - start_time,
			render_end - decode_end,
			write_end - render_end,
			write_end - start_time,
		)
	)


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except ValueError as error:
		build_parser().exit(1, f"error: {error}\n")
