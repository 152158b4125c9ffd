"""Shared fixtures for core unit tests"""

import pytest

from docsect.config import Settings
from docsect.core.parse import parse_markdown


COMPONENT_MD = """\
# Button

A reusable button component.

## Installation

```bash
bun add @ui/button
```

## Basic Usage

```tsx
import { Button } from "@ui/button";

export default function App() {
  return <Button>Click</Button>;
}
```

## Advanced Usage

```tsx
import { Button, ButtonGroup } from "@ui/button";
import { Icon } from "@ui/icon";

export default function App() {
  return (
    <ButtonGroup>
      <Button variant="primary">Save</Button>
    </ButtonGroup>
  );
}
```

## Styling

```css
.btn { color: red; }
```

## Props

| Prop | Type | Default | Description |
| --- | --- | --- | --- |
| variant | `string` | `primary` | The button style |
| size | `string` | `md` | The button size |
| disabled | `boolean` | | Whether the button is disabled |
"""

SAMPLE_FM_MD = """\
---
title: Test Doc
tags: [a, b]
---

# Title

Body content.
"""


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="component_doc")
def component_doc_fixture(settings):
    return parse_markdown(COMPONENT_MD, "button.md", settings=settings)


@pytest.fixture(name="component_md")
def component_md_fixture():
    return COMPONENT_MD


@pytest.fixture(name="frontmatter_md")
def frontmatter_md_fixture():
    return SAMPLE_FM_MD
