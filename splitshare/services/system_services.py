from sqlalchemy.ext.asyncio import AsyncEngine

from splitshare.db.store import ExpenseStore, GroupStore


async def check_db_service(engine: AsyncEngine):
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return {"db": True, "message": "Database is connected"}
    except Exception as e:
        return {"db": False, "error": str(e)}


async def system_health():
    return {
        "status": "ok"
    }


async def system_metrics(groups: GroupStore, expenses: ExpenseStore):
    return {
        "groups": await groups.count_groups(),
        "expenses": await expenses.count_expenses()
    }
