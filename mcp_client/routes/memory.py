from fastapi import APIRouter, Depends, HTTPException, status

from ..errors import MemoryStoreError
from ..models import MemoryClearResponse, MemoryListResponse, MemoryView
from ..services.memory import MemoryStore, get_memory_store

router = APIRouter(prefix="/memories", tags=["memories"])


@router.get("", response_model=MemoryListResponse)
# List saved memories newest first
def list_memories(store: MemoryStore = Depends(get_memory_store)) -> MemoryListResponse:
    records = sorted(store.list_entries(), key=lambda record: record.timestamp, reverse=True)
    return MemoryListResponse(
        memories=[
            MemoryView(
                id=str(record.id),
                timestamp=store.format_timestamp(record.timestamp),
                content=record.content,
            )
            for record in records
        ]
    )


@router.delete("", response_model=MemoryClearResponse)
def clear_memories(store: MemoryStore = Depends(get_memory_store)) -> MemoryClearResponse:
    try:
        store.clear()
    except MemoryStoreError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    return MemoryClearResponse()


__all__ = ["router"]
