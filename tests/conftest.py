"""
Pytest configuration for local imports and shared photo fixtures.
"""

# Standard Library
import os
import sys

# PIP3 modules
import PIL.Image
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def make_solid_photo(width: int, height: int, color: tuple[int, int, int]) -> PIL.Image.Image:
	"""
	Build a single-color RGB photo.

	Args:
		width: Photo width.
		height: Photo height.
		color: RGB color.

	Returns:
		PIL image.
	"""
	return PIL.Image.new("RGB", (width, height), color)


#============================================
@pytest.fixture
def red_square_photo() -> PIL.Image.Image:
	return make_solid_photo(640, 640, (255, 0, 0))


#============================================
@pytest.fixture
def blue_portrait_photo() -> PIL.Image.Image:
	return make_solid_photo(600, 800, (0, 0, 255))
