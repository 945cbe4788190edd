"""
PR Diff Parser

Parses raw unified diff text into structured DiffFile records
and filters out files that should not be reviewed.
"""

import logging
from typing import Iterable, List, Optional

from unidiff import PatchSet
from unidiff.errors import UnidiffParseError
from wcmatch import glob

from ..models.pr_diff import DEV_NULL, DiffFile, DiffChunk, DiffLine


logger = logging.getLogger(__name__)

# minimatch 기본 동작과 맞춤: ** 는 0개 이상 디렉터리, * 는 / 를 넘지 않음
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB


class DiffParseError(Exception):
    """Raised when diff text cannot be parsed as a unified diff."""


class PRDiffParser:
    """
    Parser for unified diffs returned by the GitHub API.

    Hunk and line bookkeeping is delegated to unidiff; this class converts
    its patch set into DiffFile/DiffChunk/DiffLine records and applies
    the exclusion rules.
    """

    def parse(self, diff_text: str) -> List[DiffFile]:
        """
        Parse raw diff text into DiffFile records.

        Args:
            diff_text: Unified diff (PR diff or commit compare diff)

        Returns:
            DiffFile records in diff order

        Raises:
            DiffParseError: If the text is not a valid unified diff
        """
        if not diff_text:
            return []

        try:
            patch_set = PatchSet.from_string(diff_text)
        except UnidiffParseError as e:
            raise DiffParseError(f"Failed to parse diff: {e}") from e

        files = [self._parse_patched_file(patched_file) for patched_file in patch_set]
        logger.info(f"Parsed diff: {len(files)} files, {sum(len(f.chunks) for f in files)} chunks")
        return files

    def _parse_patched_file(self, patched_file) -> DiffFile:
        target_path = self._normalize_target_path(patched_file.target_file)
        logger.debug(f"Parsing file diff: {target_path}")

        chunks = [self._parse_hunk(hunk) for hunk in patched_file]
        return DiffFile(target_path=target_path, chunks=chunks)

    @staticmethod
    def _normalize_target_path(target_file: Optional[str]) -> Optional[str]:
        """Strip the b/ prefix; /dev/null is kept as the deletion marker."""
        if not target_file:
            return None
        if target_file == DEV_NULL:
            return DEV_NULL
        if target_file.startswith('b/'):
            return target_file[2:]
        return target_file

    @staticmethod
    def _hunk_header(hunk) -> str:
        header = f"@@ -{hunk.source_start},{hunk.source_length} +{hunk.target_start},{hunk.target_length} @@"
        if hunk.section_header:
            header += f" {hunk.section_header}"
        return header

    def _parse_hunk(self, hunk) -> DiffChunk:
        changes = [
            DiffLine(
                new_line_number=line.target_line_no,
                old_line_number=line.source_line_no,
                content=line.line_type + line.value.rstrip('\r\n'),
            )
            for line in hunk
        ]
        return DiffChunk(raw_content=self._hunk_header(hunk), changes=changes)

    def filter_files(self, files: Iterable[DiffFile], exclude_patterns: Iterable[str] = ()) -> List[DiffFile]:
        """
        Drop files that must not be reviewed.

        A file is dropped when it has no target path, when it was deleted,
        or when its target path matches any exclusion glob.

        Args:
            files: Parsed DiffFile records
            exclude_patterns: Glob patterns (minimatch-style, ** for any depth)

        Returns:
            Retained files in their original order
        """
        patterns = list(exclude_patterns)
        retained = []

        for diff_file in files:
            if not diff_file.is_reviewable:
                logger.debug(f"Skipping file without target path: {diff_file.target_path}")
                continue

            if self.is_excluded(diff_file.target_path, patterns):
                logger.info(f"Excluded by pattern: {diff_file.target_path}")
                continue

            retained.append(diff_file)

        logger.info(f"Filtered to {len(retained)} reviewable files")
        return retained

    @staticmethod
    def is_excluded(file_path: str, patterns: Iterable[str]) -> bool:
        """Check whether a path matches any exclusion glob."""
        return any(glob.globmatch(file_path, pattern, flags=GLOB_FLAGS) for pattern in patterns)
