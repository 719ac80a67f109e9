#!/usr/bin/env python3
"""CI Check: Layer Boundary Enforcement.

This script enforces the package layering of the bank registry project:
- L0 (capreg): Registry core - imports nothing from this project
- L1 (bank_contracts): Shared capability interface - imports L0 only
- L2 (bank_plugins): Plugin implementations - imports L0, L1
- L3 (bank_host): Composition layer and CLI - imports L0, L1, L2

The interface lives in L1 so plugins never import the host and the host
never embeds the interface.

Usage:
    python scripts/check_layer_boundaries.py
    python scripts/check_layer_boundaries.py --verbose  # Show violations per file
    python scripts/check_layer_boundaries.py --diagram  # Show layer diagram

Exit codes:
    0: All checks pass
    1: Violations found
"""

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# Layer definitions (higher index = higher layer)
LAYERS: Dict[str, int] = {
    "capreg": 0,
    "bank_contracts": 1,
    "bank_plugins": 2,
    "bank_host": 3,
}

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Files/patterns to exclude
EXCLUDE_PATTERNS = [
    "**/tests/**",
    "**/test_*.py",
    "**/conftest.py",
    "**/__pycache__/**",
]


@dataclass
class Violation:
    """A single layer boundary violation."""
    file: Path
    line: int
    import_module: str
    importing_layer: str
    imported_layer: str

    def __str__(self) -> str:
        return (
            f"{self.file}:{self.line}: [LAYER_VIOLATION] "
            f"{self.importing_layer} (L{LAYERS[self.importing_layer]}) "
            f"imports {self.imported_layer} (L{LAYERS[self.imported_layer]})"
        )


def get_layer_for_import(module_name: str) -> Optional[str]:
    top = module_name.split(".", 1)[0]
    return top if top in LAYERS else None


def get_layer_for_file(filepath: Path, root: Path) -> Optional[str]:
    try:
        relative = filepath.relative_to(root)
    except ValueError:
        return None
    if not relative.parts:
        return None
    top = relative.parts[0]
    return top if top in LAYERS else None


class LayerBoundaryChecker:
    """AST-based checker for layer boundary violations."""

    def __init__(self, filepath: Path, source_layer: str):
        self.filepath = filepath
        self.source_layer = source_layer
        self.source_level = LAYERS[source_layer]
        self.violations: List[Violation] = []

    def check(self) -> List[Violation]:
        """Run layer boundary check on the file."""
        try:
            content = self.filepath.read_text(encoding="utf-8")
            tree = ast.parse(content, filename=str(self.filepath))
        except (OSError, SyntaxError):
            return []

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    self._check_import(alias.name, node.lineno)
            elif isinstance(node, ast.ImportFrom):
                # Relative imports stay inside the same package
                if node.module and node.level == 0:
                    self._check_import(node.module, node.lineno)

        return self.violations

    def _check_import(self, module_name: str, lineno: int) -> None:
        imported_layer = get_layer_for_import(module_name)
        if imported_layer is None or imported_layer == self.source_layer:
            return

        if LAYERS[imported_layer] >= self.source_level:
            self.violations.append(
                Violation(
                    file=self.filepath,
                    line=lineno,
                    import_module=module_name,
                    importing_layer=self.source_layer,
                    imported_layer=imported_layer,
                )
            )


def should_check_file(filepath: Path) -> bool:
    if filepath.suffix != ".py":
        return False
    return not any(filepath.match(pattern) for pattern in EXCLUDE_PATTERNS)


def get_files_to_check(root: Path = PROJECT_ROOT) -> List[Tuple[Path, str]]:
    """Get all Python files to check with their layer."""
    files = []
    for package in LAYERS:
        package_dir = root / package
        if not package_dir.exists():
            continue
        for filepath in package_dir.rglob("*.py"):
            if should_check_file(filepath):
                layer = get_layer_for_file(filepath, root)
                if layer:
                    files.append((filepath, layer))
    return sorted(files, key=lambda x: (LAYERS[x[1]], x[0]))


def check_tree(root: Path = PROJECT_ROOT) -> List[Violation]:
    violations: List[Violation] = []
    for filepath, layer in get_files_to_check(root):
        violations.extend(LayerBoundaryChecker(filepath, layer).check())
    return violations


def print_layer_diagram() -> None:
    print("""
Layer Architecture:

  L3: bank_host       composition, BankService, CLI
  L2: bank_plugins    tagged bank implementations
  L1: bank_contracts  BankProvider interface, BANK_TAG
  L0: capreg          registry, discovery, errors

Import Rules:
  - Higher layers may import from lower layers
  - Lower layers MUST NOT import from higher layers
  - Same-package imports are allowed
""")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check layer boundary violations between registry packages"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--diagram", action="store_true", help="Show layer diagram")
    parser.add_argument("--root", type=Path, default=PROJECT_ROOT, help="Project root")
    args = parser.parse_args(argv)

    if args.diagram:
        print_layer_diagram()
        return 0

    files = get_files_to_check(args.root)
    print(f"Checking layer boundaries in {args.root} ({len(files)} files)")

    if args.verbose:
        for filepath, layer in files:
            print(f"  L{LAYERS[layer]} {filepath}")

    violations = check_tree(args.root)
    if violations:
        print(f"FAILED: {len(violations)} layer boundary violation(s) found")
        for v in violations[:20]:
            print(f"  {v}")
        return 1

    print("PASSED: no layer boundary violations")
    return 0


if __name__ == "__main__":
    sys.exit(main())
