#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Refresh layout geometry baselines for tests.
"""

import dataclasses
import json
import pathlib
import subprocess

import photo_package_sheet.config
import photo_package_sheet.packages


#============================================
def get_repo_root() -> pathlib.Path:
	"""
	Get the repository root via git, falling back to this file's folder.

	Returns:
		Repository root path.
	"""
	result = subprocess.run(
		["git", "rev-parse", "--show-toplevel"],
		capture_output=True,
		text=True,
		check=False,
	)
	root = result.stdout.strip()
	if result.returncode != 0 or not root:
		return pathlib.Path(__file__).resolve().parent
	return pathlib.Path(root)


#============================================
def write_json(path: pathlib.Path, payload: dict) -> None:
	"""
	Write a JSON payload to disk.

	Args:
		path: Output path.
		payload: JSON payload.
	"""
	text = json.dumps(payload, indent=2, sort_keys=True)
	path.write_text(text + "\n", encoding="utf-8")


#============================================
def build_baseline() -> dict:
	"""
	Summarize every package layout at the default geometry.

	Returns:
		Dict keyed by package id.
	"""
	geometry = photo_package_sheet.config.DEFAULT_GEOMETRY
	baseline = {}
	for package_id in photo_package_sheet.packages.PACKAGE_IDS:
		layout = photo_package_sheet.packages.get_layout(package_id, geometry)
		bounds = photo_package_sheet.packages.layout_bounds(layout)
		baseline[package_id] = {
			"cells": len(layout.cells),
			"cut_lines": len(layout.cut_lines),
			"has_label": layout.has_label,
			"bounds": dataclasses.asdict(bounds),
		}
	return baseline


#============================================
def main() -> None:
	"""
	Run the layout baseline refresh.
	"""
	repo_root = get_repo_root()
	fixtures_dir = repo_root / "tests" / "fixtures"
	fixtures_dir.mkdir(parents=True, exist_ok=True)
	write_json(fixtures_dir / "layout_baseline.json", build_baseline())
	print("Updated layout baseline in tests/fixtures.")


if __name__ == "__main__":
	main()
