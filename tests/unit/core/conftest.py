"""Shared fixtures for core unit tests"""

import pytest

from mdcontent.core.content import MarkdownContent
from mdcontent.core.parse import make_parser


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

> Quoted *words* here.
>
> Second quoted paragraph.

- item one
- item two

```python
print("hello")
```

---

Footer paragraph.
"""

SAMPLE_FM_MD = """\
---
title: Test Doc
tags: [a, b]
---

# Title

Body content.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser("gfm-like")


@pytest.fixture(name="sample_content")
def sample_content_fixture():
    return MarkdownContent.from_markdown(SAMPLE_MD)


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_fm_md")
def sample_fm_md_fixture():
    return SAMPLE_FM_MD
