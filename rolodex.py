#!/usr/bin/env python3
"""
Rolodex Text - copy marked sections of styled rolodex entries into a template

Simple usage:
    python rolodex.py fill "Springfield"        # Fill the template from the rolodex
    python rolodex.py fill                      # Use the template's key cell
    python rolodex.py export "Springfield" out.docx  # Write a section report
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from rolodex_text.cli import app

if __name__ == "__main__":
    app()
