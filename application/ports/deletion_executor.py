from typing import Protocol


class DeletionExecutor(Protocol):
    """Port for the out-of-process component that actually deletes blobs."""

    async def delete(self, blob_id: str) -> bool:
        """Delete one blob. Returns False if the executor declined or the deletion failed."""
        ...
