from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")


@dataclass
class Expected:
    path: Path
    exit_code: int = 0
    exists: bool = True


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    clean: list[Path] | None = None

    def full_args(self) -> list[str]:
        return [sys.executable, "plot.py", *self.args]


def _image(name: str, filename: str, pixels: str, upper_left: str, lower_right: str, *options: str) -> Example:
    path = EXAMPLES_ROOT / name / filename
    return Example(
        name=name,
        args=[*options, str(path), pixels, upper_left, lower_right],
        expected=[Expected(path)],
        clean=[EXAMPLES_ROOT / name],
    )


EXAMPLES: list[Example] = [
    _image("reference", "64x48.png", "64x48", "-1.2+0.35i", "-1+0.2i"),
    _image("full-set", "overview.png", "400x300", "-2.5+1.5i", "1.5-1.5i"),
    _image("seahorse-valley", "seahorse.png", "320x240", "-0.8+0.2i", "-0.7+0.1i"),
    _image("elephant-valley", "elephant.png", "320x240", "0.25+0.1i", "0.35+0i"),
    _image("workers", "banded.png", "640x480", "-2.5+1.5i", "1.5-1.5i", "--workers", "4"),
    _image("format", "overview.tif", "200x150", "-2.5+1.5i", "1.5-1.5i", "--format", "tif"),
    _image("verbose", "diagnostic.png", "160x120", "-2.5+1.5i", "1.5-1.5i", "--verbose"),
    Example(
        name="zero-bounds",
        args=[str(EXAMPLES_ROOT / "zero-bounds" / "empty.png"), "0x48", "-1.2+0.35i", "-1+0.2i"],
        expected=[Expected(EXAMPLES_ROOT / "zero-bounds" / "empty.png", exit_code=2, exists=False)],
        clean=[EXAMPLES_ROOT / "zero-bounds"],
    ),
    Example(
        name="usage",
        args=["only-a-file.png"],
        expected=[Expected(Path("only-a-file.png"), exit_code=1, exists=False)],
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    clean = example.clean or []
    _ensure_clean(clean)


def _verify(example: Example, returncode: int) -> None:
    for expected in example.expected:
        if returncode != expected.exit_code:
            raise RuntimeError(f"Example {example.name} exited with {returncode}, expected {expected.exit_code}")
        if expected.exists and not expected.path.is_file():
            raise RuntimeError(f"Expected file {expected.path} was not created")
        if not expected.exists and expected.path.exists():
            raise RuntimeError(f"File {expected.path} should not have been created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        completed = subprocess.run(example.full_args(), check=False)
        _verify(example, completed.returncode)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
