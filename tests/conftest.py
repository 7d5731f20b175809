import pytest

from textbook.config import CompileConfig
from textbook.diagnostics import CompileDiagnostics
from textbook.tags import ParentContext


# Rozdział z sekcją i podsekcją: metadane stron, element rozcięty pustą linią
# i blokiem ```, lista z łamaniem strony, nagłówek h4 i nieznany tag.
SAMPLE_SOURCE = """\
Preface text is ignored.

# 1: Limits

```toml
page = 3
```

Intro with <resultref id="1.1.1">Theorem 1.1.1</resultref> inside.

## 1.1: Sequences

```toml
page = 4
```

<result id="1.1.1" type="theorem" name="Squeeze">
Statement.

```python
x = 1
```
</result>

<proof of="1.1.1">
Trivial.
</proof>

### 1.1.1: Details: fine print

```toml
page = 5
```

<exercise id="1.1.1" name="Warmup">
Prove it.

<ol type="roman">
<li roman="i" value="1">First.</li>
<pagebreak page="6"/>
<li roman="ii" value="2">Second.</li>
</ol>
</exercise>

#### Remark

<foo>
dropped
</foo>
"""


@pytest.fixture
def sample_source():
    return SAMPLE_SOURCE


@pytest.fixture
def config():
    return CompileConfig(namespace="acme", book="v1")


@pytest.fixture
def diagnostics():
    return CompileDiagnostics()


@pytest.fixture
def text_context():
    """Context of body items placed directly in container 1.2."""
    return ParentContext("text", "1.2")
