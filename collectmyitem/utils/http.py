from typing import Any, Dict
from fastapi import Request


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Lit le body JSON d'une requête de manière tolérante.
    - Body vide, JSON invalide ou non-objet => {} (les défauts métier s'appliquent ensuite).
    - JSONDecodeError et UnicodeDecodeError dérivent de ValueError.
    """
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
