import json
import re
from pathlib import Path

import pytest

SAMPLES_DIR = Path(__file__).parent / "samples"
HEADER_RE = re.compile(r";[ ]*expected (.*)")


def load_sample(path: Path):
    first_line, _, source = path.read_text(encoding="utf-8").partition("\n")
    match = HEADER_RE.match(first_line)
    if match is None:
        raise ValueError(f"Invalid expected header in {path}")
    return source, json.loads(match.group(1))


@pytest.mark.parametrize("path", sorted(SAMPLES_DIR.glob("*.clsk")), ids=lambda p: p.stem)
def test_sample(run, path):
    source, expected = load_sample(path)
    result = run(source)
    assert result.kind == expected["kind"]
    assert result.value == expected["value"]
