from typing import Any, Optional, Protocol, Sequence, Tuple


class ModelProvider(Protocol):
    """Protocol describing a multimodal completion provider."""

    def call_images(self, cfg: Any, units: Sequence[Any], prompt: str, quiet: bool = False) -> Tuple[str, Optional[dict]]:
        ...
