#!/usr/bin/env python3
"""
Package each monitoring Lambda function as build/<function>.zip.

The service package and its runtime dependencies are installed once and
shared by every archive.
"""
import shutil
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / "src"
BUILD_DIR = PROJECT_ROOT / "build"


def install_service(target: Path) -> None:
    subprocess.run([sys.executable, "-m", "pip", "install", str(PROJECT_ROOT), "-t", str(target)], check=True)


def main():
    functions = sorted(d for d in SRC_DIR.iterdir() if (d / "lambda_function.py").exists())
    site_packages = BUILD_DIR / "site-packages"

    shutil.rmtree(BUILD_DIR, ignore_errors=True)
    install_service(site_packages)

    for function_dir in functions:
        staging = BUILD_DIR / function_dir.name
        shutil.copytree(site_packages, staging)
        shutil.copy2(function_dir / "lambda_function.py", staging)

        archive = shutil.make_archive(str(staging), "zip", root_dir=staging)
        shutil.rmtree(staging)
        print(f"{function_dir.name}: {archive}")

    shutil.rmtree(site_packages)


if __name__ == "__main__":
    main()
