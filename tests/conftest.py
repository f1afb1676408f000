"""Shared fixtures for slidemark tests."""

import pytest

# A document exercising every part of the format.
SAMPLE_DOC = """\
# A comment at the top
Go Concurrency Patterns
Building blocks
15:04 2 Jan 2006
Tags: go, concurrency , talks
: Title note

Rob Pike
Google
@rob_pike
rob@golang.org
https://go.dev/

Jane Doe

* Introduction

Concurrency is not parallelism.
\\.dots are escaped

- goroutines
- channels

: Remember to smile

** Goroutines

\tgo f()
\tgo g()

.background bg.png

* The End

Thanks!
"""

NESTED_DOC = """\
Nesting

* A
** B
* C
"""


@pytest.fixture
def sample_doc_text():
    return SAMPLE_DOC


@pytest.fixture
def nested_doc_text():
    return NESTED_DOC


@pytest.fixture
def sample_doc_file(tmp_path):
    """Write SAMPLE_DOC to a temp file and return its path."""
    p = tmp_path / "talk.slide"
    p.write_text(SAMPLE_DOC, encoding="utf-8")
    return p


@pytest.fixture
def lesson_dir(tmp_path):
    """A content directory with two lessons and one runnable snippet."""
    content = tmp_path / "content"
    content.mkdir()
    (content / "hello.go").write_text(
        'package main\n\nfunc main() {\n\tprintln("hello") // HL\n}\n', encoding="utf-8"
    )
    (content / "basics.article").write_text(
        "Basics\n"
        "The first lesson\n"
        "\n"
        "* Hello\n"
        "\n"
        "Run this.\n"
        "\n"
        ".play hello.go\n"
        "\n"
        "* Next\n"
        "\n"
        "Read this.\n",
        encoding="utf-8",
    )
    (content / "flow.article").write_text(
        "Flow control\n"
        "\n"
        "* If\n"
        "\n"
        "- if\n"
        "- else\n",
        encoding="utf-8",
    )
    (content / "notes.txt").write_text("not a lesson\n", encoding="utf-8")
    return content
