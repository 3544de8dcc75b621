[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "robotnav"
version = "0.1.0"
description = "Decision logic for small mobile robots: PID controllers, laser-scan safety checks, wall following and navigation goal sequencing."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "robotics",
    "pid",
    "wall-following",
    "obstacle-avoidance",
    "laser-scan",
    "teleoperation",
    "navigation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["robotnav"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
