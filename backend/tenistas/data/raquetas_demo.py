"""
Demo racket catalogue loaded at startup when SEED_DEMO_DATA is enabled.

Rackets are returned without ids so they go through the repository create
path and get ids, external ids and timestamps like any client-created record.
"""

from typing import List

from tenistas.models.raqueta import Raqueta


def get_raquetas_demo_data() -> List[Raqueta]:
    """Fresh, unsaved demo rackets (a new list on every call)."""
    return [
        Raqueta(
            brand="Babolat",
            model="Pure Aero",
            price=199.95,
            image_ref="https://www.babolat.com/pure-aero.png",
        ),
        Raqueta(
            brand="Babolat",
            model="Pure Drive",
            price=189.95,
            image_ref="https://www.babolat.com/pure-drive.png",
        ),
        Raqueta(
            brand="Head",
            model="Speed MP",
            price=219.95,
            image_ref="https://www.head.com/speed-mp.png",
        ),
        Raqueta(
            brand="Wilson",
            model="Pro Staff 97",
            price=249.0,
            image_ref="https://www.wilson.com/pro-staff-97.png",
        ),
        Raqueta(
            brand="Wilson",
            model="Blade 98",
            price=229.0,
            image_ref=None,
        ),
    ]


async def seed_demo_data(repository) -> int:
    """
    Save the demo rackets through `repository` if it is empty.

    Returns:
        Number of rackets created (0 when the store already had data).
    """
    if await repository.count() > 0:
        return 0
    demo = get_raquetas_demo_data()
    for raqueta in demo:
        await repository.save(raqueta)
    return len(demo)
