[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jjnavi"
version = "0.2.0"
description = "Shell integration, diagnostics types and output rendering for navigating Jujutsu workspaces."
requires-python = ">=3.10"
dependencies = []
keywords = ["jj", "jujutsu", "workspace", "shell", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
navi = "jjnavi.app:main"
nv = "jjnavi.app:nv_main"

[tool.hatch.build.targets.wheel]
packages = ["jjnavi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
