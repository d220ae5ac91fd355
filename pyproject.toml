[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "markbook"
version = "0.1.0"
description = "Lecturer mark book pages: session checks, module and student records, authorisation codes"
requires-python = ">=3.10"
keywords = ["cgi", "markbook", "lecturer", "modules", "base64", "aes-gcm", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: CGI Tools/Libraries",
    "Topic :: Education",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
markbook-authcode = "markbook.authcode:main"
markbook-reset-db = "markbook.database:main"

[tool.hatch.build.targets.wheel]
packages = ["markbook"]

[tool.pytest.ini_options]
addopts = "-ra"
