from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import pandas as pd
from kedro.framework.hooks import hook_impl

log = logging.getLogger(__name__)


def _describe_output(out: Any) -> Optional[tuple[str, int]]:
    """(descrição, tamanho) para DataFrames e coleções de registros; None para o resto."""
    if isinstance(out, pd.DataFrame):
        return f"DataFrame shape={out.shape} cols={list(out.columns)}", len(out)
    if isinstance(out, (list, tuple)):
        return f"{len(out)} registros", len(out)
    return None


class DataObservabilityHooks:
    """Loga início/fim dos nodes de relatório e avisa quando uma tabela sai vazia."""

    @hook_impl
    def before_node_run(self, node, inputs: Dict[str, Any], is_async: bool, **kwargs):
        log.info("Starting node: %s (inputs=%s)", node.name, sorted(inputs))

    @hook_impl
    def after_node_run(self, node, outputs: Dict[str, Any], inputs: Dict[str, Any], **kwargs):
        log.info("Finished node: %s", node.name)

        for name, out in outputs.items():
            described = _describe_output(out)
            if described is None:
                continue

            text, size = described
            log.info("Output %s: %s", name, text)
            if size == 0:
                log.warning("Output %s is EMPTY (node=%s)", name, node.name)
