[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "novex"
version = "0.7.1"
description = "A hobby operating system core modelled in Python: RAM filesystem, page allocator, MBR tools, input decoders, VGA console and shell"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating-system",
    "kernel",
    "ramfs",
    "mbr",
    "vga",
    "ps2",
    "shell",
    "simulation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
novex = "novex.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["novex"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
