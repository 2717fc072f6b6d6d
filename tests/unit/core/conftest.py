"""Shared fixtures for core unit tests"""

import pytest

from foldaq.config import Settings
from foldaq.core.parse import make_parser


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

---

Footer paragraph.
"""

FAQ_MD = """\
# Chapter
## Sub

#f Do you know who I am? #q
hey,> < its me `code` #a

Text
"""


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="parser")
def parser_fixture(settings):
    return make_parser(settings)


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="faq_md")
def faq_md_fixture():
    return FAQ_MD
