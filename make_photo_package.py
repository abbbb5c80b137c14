#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Compose one photo into a 4x6 in photo package sheet (packages A-H).
"""

import photo_package_sheet.cli


if __name__ == "__main__":
	photo_package_sheet.cli.main()
