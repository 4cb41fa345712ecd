"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


WEBSITE_MD = """# Acme Website

## Design
- [ ] Pick a colour palette
- [x] Collect references

## Build
### Frontend
- [ ] Navigation
  - [ ] Mobile menu
  - [ ] Desktop menu
- [ ] Footer ✅ 2024-02-01
"""

INTRANET_MD = """## Launch
- [ ] Announce to staff
"""

MIGRATION_MD = """## Database
- [ ] Export "legacy" tables, then verify
"""


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def customers_dir(tmp_path):
    """A small Customers tree with two customers and a hidden directory."""
    root = tmp_path / "Customers"
    write_file(root / "Acme" / "Website.md", WEBSITE_MD)
    write_file(root / "Acme" / "archive" / "Intranet.md", INTRANET_MD)
    write_file(root / "Acme" / "notes.txt", "- [ ] not a project file\n")
    write_file(root / "Acme" / ".obsidian" / "Template.md", "- [ ] template task\n")
    write_file(root / "Globex" / "Migration.md", MIGRATION_MD)
    write_file(root / ".trash" / "Old.md", "- [ ] deleted customer\n")
    write_file(root / "README.md", "- [ ] not inside a customer\n")
    return root
