"""AST parser producing CPython syntax trees for rule analysis."""

import ast
import hashlib
import io
import tokenize
from functools import lru_cache
from pathlib import Path
from typing import Any

from matchaudit.exceptions import SourceParseError
from matchaudit.utils.logging import logger


class ASTParser:
    """Parses Python sources into the ``python_ast`` wrapper consumed by rules."""

    EXTENSIONS = {
        ".py": "python",
        ".pyi": "python",
    }

    def parse_file(self, file_path: Path, language: str = None) -> dict[str, Any] | None:
        """Parse a file into an AST wrapper.

        Returns None for files that are not Python.

        Raises:
            SourceParseError: If the file is not valid Python
            OSError: If the file cannot be read
        """
        file_path = Path(file_path)
        if language is None:
            language = self._detect_language(file_path)

        if language != "python":
            logger.debug("Skipping {path}: unsupported language", path=file_path)
            return None

        with open(file_path, "rb") as f:
            raw = f.read()

        return self._wrap(self._decode(raw, str(file_path)), str(file_path))

    def parse_content(self, content: str, language: str = "python", filepath: str = "unknown") -> dict[str, Any] | None:
        """Parse in-memory content into an AST wrapper."""
        if language != "python":
            return None
        return self._wrap(content, filepath)

    def supports_language(self, language: str) -> bool:
        """Check if a language is supported for AST parsing."""
        return language == "python"

    def _wrap(self, content: str, filepath: str) -> dict[str, Any]:
        content_hash = hashlib.md5(content.encode("utf-8")).hexdigest()
        try:
            tree = self._parse_python_cached(content_hash, content)
        except SyntaxError as e:
            raise SourceParseError(filepath, e.lineno, e.msg) from e
        except ValueError as e:
            # null bytes in the source
            raise SourceParseError(filepath, None, str(e)) from e

        return {
            "type": "python_ast",
            "tree": tree,
            "language": "python",
            "content": content,
        }

    def _decode(self, raw: bytes, filepath: str) -> str:
        """Decode source bytes the way the interpreter would.

        Honours a UTF-8 BOM and PEP 263 coding declarations; the BOM is not
        part of the returned text.
        """
        try:
            encoding, _ = tokenize.detect_encoding(io.BytesIO(raw).readline)
            return raw.decode(encoding)
        except SyntaxError as e:
            # conflicting BOM and cookie, or unknown encoding name
            raise SourceParseError(filepath, e.lineno, e.msg) from e
        except UnicodeDecodeError as e:
            raise SourceParseError(filepath, None, str(e)) from e

    def _detect_language(self, file_path: Path) -> str:
        """Detect language from file extension."""
        return self.EXTENSIONS.get(file_path.suffix.lower(), "")

    @lru_cache(maxsize=10000)  # noqa: B019 - intentional cache, parser is long-lived
    def _parse_python_cached(self, content_hash: str, content: str) -> ast.AST:
        """Parse Python code with caching based on content hash."""
        return ast.parse(content)
