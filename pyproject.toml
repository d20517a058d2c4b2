[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syncdemos"
version = "0.1.0"
description = "Small runnable demonstrations of classic concurrency patterns: monitors, semaphores and prioritised interrupts"
requires-python = ">=3.10"
dependencies = []
keywords = ["concurrency", "monitor", "semaphore", "readers-writers", "ring-buffer", "interrupts", "signals", "education"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
syncdemos-monitors = "syncdemos.monitors:main"
syncdemos-semaphores = "syncdemos.semaphores:main"
syncdemos-interrupts = "syncdemos.interrupts:main"

[tool.hatch.build.targets.wheel]
packages = ["syncdemos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
