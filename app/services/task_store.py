from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, text
from app.models.task import Task

LIKE_ESCAPE = "\\"


def _contains_pattern(term: str) -> str:
    """%term% with LIKE wildcards in the term matched literally."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


async def find_by_id(db: AsyncSession, task_id: int) -> Optional[Task]:
    result = await db.execute(select(Task).where(Task.id == task_id))
    return result.scalar_one_or_none()


async def find_all(db: AsyncSession) -> List[Task]:
    result = await db.execute(select(Task))
    return list(result.scalars().all())


async def find_by_title_containing(db: AsyncSession, title: str) -> List[Task]:
    result = await db.execute(
        select(Task).where(Task.title.ilike(_contains_pattern(title), escape=LIKE_ESCAPE))
    )
    return list(result.scalars().all())


async def search_by_title(db: AsyncSession, title: str) -> List[Task]:
    """Same match as find_by_title_containing, spelled as LOWER(title) LIKE LOWER(:term)."""
    result = await db.execute(
        select(Task).where(
            func.lower(Task.title).like(func.lower(_contains_pattern(title)), escape=LIKE_ESCAPE)
        )
    )
    return list(result.scalars().all())


async def find_by_title_native(db: AsyncSession, title: str) -> List[Task]:
    stmt = text(
        "SELECT * FROM tasks WHERE LOWER(title) LIKE LOWER(:term) ESCAPE '\\'"
    ).bindparams(term=_contains_pattern(title))
    result = await db.execute(select(Task).from_statement(stmt))
    return list(result.scalars().all())


async def find_by_status(db: AsyncSession, status: str) -> List[Task]:
    result = await db.execute(select(Task).where(Task.status == status))
    return list(result.scalars().all())


async def find_by_title_containing_and_status(db: AsyncSession, title: str, status: str) -> List[Task]:
    result = await db.execute(
        select(Task)
        .where(Task.title.ilike(_contains_pattern(title), escape=LIKE_ESCAPE))
        .where(Task.status == status)
    )
    return list(result.scalars().all())


async def save(db: AsyncSession, task: Task) -> Task:
    db.add(task)
    await db.commit()
    await db.refresh(task)
    return task


async def delete(db: AsyncSession, task: Task) -> None:
    await db.delete(task)
    await db.commit()
