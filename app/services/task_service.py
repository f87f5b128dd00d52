from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import Task, TaskCreate, TaskUpdate, get_utc_now

# largest value an INTEGER primary key column can hold
MAX_TASK_ID = 2**31 - 1


def _storable_id(task_id: int) -> bool:
    return 1 <= task_id <= MAX_TASK_ID


class TaskService:
    """
    Task CRUD, always scoped to one owner.

    Every query carries ``owner_id`` in its WHERE clause; a task owned by
    someone else looks exactly like a task that does not exist.
    """

    @staticmethod
    async def list_tasks(owner_id: int, db: AsyncSession):
        query = (
            select(Task)
            .where(Task.owner_id == owner_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        result = await db.exec(query)
        return result.all()

    @staticmethod
    async def create_task(owner_id: int, task_data: TaskCreate, db: AsyncSession):
        task = Task.model_validate(
            task_data, update={"owner_id": owner_id, "completed": False}
        )
        db.add(task)
        await db.commit()
        await db.refresh(task)
        return task

    @staticmethod
    async def get_owned_task(task_id: int, owner_id: int, db: AsyncSession):
        if not _storable_id(task_id):
            return None
        query = (
            select(Task)
            .where(Task.id == task_id, Task.owner_id == owner_id)
            .execution_options(populate_existing=True)
        )
        result = await db.exec(query)
        return result.first()

    @staticmethod
    async def update_task(
        task_id: int, owner_id: int, task_data: TaskUpdate, db: AsyncSession
    ):
        if not _storable_id(task_id):
            return None
        update_data = task_data.model_dump(exclude_unset=True)
        update_data["updated_at"] = get_utc_now()

        # ownership is part of the UPDATE itself, no separate check needed
        result = await db.exec(
            update(Task)
            .where(Task.id == task_id, Task.owner_id == owner_id)
            .values(**update_data)
        )
        if result.rowcount == 0:
            return None
        await db.commit()
        return await TaskService.get_owned_task(task_id, owner_id, db)

    @staticmethod
    async def delete_task(task_id: int, owner_id: int, db: AsyncSession):
        if not _storable_id(task_id):
            return False
        result = await db.exec(
            delete(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        )
        await db.commit()
        return result.rowcount > 0
