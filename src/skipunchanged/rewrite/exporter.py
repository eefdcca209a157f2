#!/usr/bin/env python3
"""
SKIPUNCHANGED EXPORTER - Round-Trip Writer
------------------------------------------
Converts the rewritten CommentedMap back into YAML text without
reordering anything.

Author: bk-skip-unchanged Team
Date: 2026-10-19
"""

import io
from typing import Any

from ruamel.yaml import YAML


class PipelineExporter:
    """
    The Reconstructor: dumps a round-trip document to a string.
    """

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True
        # Buildkite examples indent sequence items two spaces under their key
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def export(self, document: Any) -> str:
        stream = io.StringIO()
        self.yaml.dump(document, stream)
        return stream.getvalue()
