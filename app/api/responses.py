from typing import Any, Dict, Optional


def success(message: str, data: Optional[Any] = None) -> Dict[str, Any]:
    """Build the success envelope shared by every endpoint."""
    return {"success": 1, "message": message, "data": data}
