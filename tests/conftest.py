import hashlib
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def md5_hex(phrase: str) -> str:
    return hashlib.md5(phrase.encode("ascii")).hexdigest()


@pytest.fixture
def write_word_list(tmp_path):
    """Factory writing ``words`` one per line and returning the file path."""

    def _write(words, name="words.txt"):
        path = tmp_path / name
        path.write_text("\n".join(words) + "\n", encoding="utf-8")
        return path

    return _write

