"""Command implementations for QueryComposer CLI."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from QueryComposer.builder import build_query
from QueryComposer.config import AppConfig, parse_yaml
from QueryComposer.core.params import Params
from QueryComposer.utils.log import log


@dataclass(slots=True)
class RenderCommand:
    """Build one request file into a query and emit its parameters."""

    config: AppConfig
    request_path: Path
    output_path: Path | None = None

    def execute(self) -> Params:
        """Build the query and write the parameter mapping as JSON.

        Returns:
            The serialized parameter mapping.
        """
        request = parse_yaml(self.request_path.read_text(encoding="utf-8"))
        query = build_query(request, self.config.setup.build_setup(), self.config.query)
        params = query.to_params()
        log.info(
            "Rendered %s: %d params, page=%d per_page=%d query_facets=%s",
            self.request_path,
            len(params),
            query.page,
            query.per_page,
            sorted(query.query_facets),
        )

        payload = json.dumps(params, ensure_ascii=False, indent=2)
        if self.output_path is None:
            print(payload)
        else:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(payload + "\n", encoding="utf-8")
            log.info("JSON saved to %s", self.output_path)
        return params
