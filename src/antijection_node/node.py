"""Execution routine of the Antijection node."""

from collections.abc import Mapping, Sequence
from typing import Any

import httpx
import structlog

from antijection_node.client import AntijectionClient
from antijection_node.credentials.base import AntijectionCredentials
from antijection_node.description import NODE_DESCRIPTION, NodeDescription
from antijection_node.errors import classify_error
from antijection_node.exceptions import AntijectionError, NodeOperationError
from antijection_node.models import NodeExecutionData, NodeParameters, PairedItem
from antijection_node.payload import build_detection_request, parse_parameters

logger = structlog.get_logger()

ItemParameters = Mapping[str, Any] | NodeParameters


class AntijectionNode:
    """Sends each input item's prompt to the detection API.

    Items are processed one at a time, in order, with one request per
    item. A failing item either aborts the run or, when
    ``continue_on_fail`` is set, is emitted as an error record while the
    remaining items are still processed.
    """

    def __init__(self, description: NodeDescription = NODE_DESCRIPTION) -> None:
        self.description = description

    def execute(
        self,
        items: Sequence[ItemParameters],
        credentials: AntijectionCredentials,
        *,
        continue_on_fail: bool = False,
        http_client: httpx.Client | None = None,
    ) -> list[NodeExecutionData]:
        """Run detection for every input item.

        Args:
            items: Resolved node parameters, one entry per input item.
            credentials: Resolved ``antijectionApi`` credential.
            continue_on_fail: Record per-item failures as output instead of
                aborting the run.
            http_client: Host-owned httpx client to issue requests with.

        Returns:
            One output item per input item, paired by index.

        Raises:
            NodeOperationError: On the first failing item, unless
                ``continue_on_fail`` is set.
        """
        results: list[NodeExecutionData] = []

        with AntijectionClient(credentials, http_client=http_client) as client:
            for index, raw in enumerate(items):
                try:
                    results.append(self._process_item(client, raw, index))
                except AntijectionError as e:
                    info = classify_error(e)
                    logger.info(
                        "antijection_item_failed",
                        item_index=index,
                        status_code=info.status_code,
                        error=info.message,
                    )
                    if continue_on_fail:
                        results.append(
                            NodeExecutionData(
                                json=info.to_record().to_json(),
                                pairedItem=PairedItem(item=index),
                                is_error=True,
                            )
                        )
                        continue
                    raise NodeOperationError(info.full_message, item_index=index) from e

        return results

    def _process_item(
        self, client: AntijectionClient, raw: ItemParameters, index: int
    ) -> NodeExecutionData:
        parameters = parse_parameters(raw, index)
        request = build_detection_request(parameters, index)
        response = client.detect(request)
        logger.debug("antijection_item_done", item_index=index)
        return NodeExecutionData(json=_as_json_object(response), pairedItem=PairedItem(item=index))


def _as_json_object(response: Any) -> dict[str, Any]:
    # Output items must carry an object; wrap anything else without altering it
    if isinstance(response, dict):
        return response
    return {"data": response}
