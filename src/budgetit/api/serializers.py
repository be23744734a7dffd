"""Response payloads: camelCase keys, BRL money, ``dd/mm/yy HH:MM`` dates."""

from typing import Any

from budgetit.domain.entities import Budget, Done, ProjectReport, Task, Transaction
from budgetit.utils.date_parser import format_datetime
from budgetit.utils.money import format_brl


def done_to_dict(done: Done) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "uuid": done.uuid,
        "name": done.name,
        "description": done.description,
        "register": format_datetime(done.register),
        "userUuid": done.user_uuid,
        "doneExpense": None,
        "doneActivity": None,
    }
    if done.expense is not None:
        payload["doneExpense"] = {
            "uuid": done.expense.uuid,
            "amount": format_brl(done.expense.amount),
            "date": format_datetime(done.expense.date),
            "supplierUuid": done.expense.supplier_uuid,
        }
    if done.activity is not None:
        payload["doneActivity"] = {
            "uuid": done.activity.uuid,
            "beginDate": format_datetime(done.activity.begin_date),
            "endDate": format_datetime(done.activity.end_date),
            "hourlyRate": format_brl(done.activity.hourly_rate),
        }
    return payload


def task_to_dict(task: Task) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": task.id,
        "uuid": task.uuid,
        "name": task.name,
        "description": task.description,
        "finished": task.finished,
        "beginDate": format_datetime(task.begin_date),
        "endDate": format_datetime(task.end_date),
        "revenue": format_brl(task.revenue),
        "statusUuid": task.status_uuid,
        "projectUuid": task.project_uuid,
        "userUuid": task.user_uuid,
        "budgetUuid": task.budget_uuid,
        "originalTaskId": task.origin_id,
        "taskExpense": None,
        "taskActivity": None,
        "dones": [done_to_dict(done) for done in task.dones],
    }
    if task.expense is not None:
        payload["taskExpense"] = {
            "uuid": task.expense.uuid,
            "amount": format_brl(task.expense.amount),
        }
    if task.activity is not None:
        payload["taskActivity"] = {
            "uuid": task.activity.uuid,
            "hourlyRate": format_brl(task.activity.hourly_rate),
        }
    return payload


def budget_to_dict(budget: Budget) -> dict[str, Any]:
    return {
        "uuid": budget.uuid,
        "register": format_datetime(budget.register),
        "tasks": [task_to_dict(task) for task in budget.tasks],
    }


def report_to_dict(report: ProjectReport) -> dict[str, Any]:
    """Project fields plus its dates and the three money figures."""
    project = report.project
    return {
        "uuid": project.uuid,
        "name": project.name,
        "description": project.description,
        "register": format_datetime(project.register),
        "active": project.active,
        "clientUuid": project.client_uuid,
        "statusUuid": project.status_uuid,
        "budgetUuid": project.budget_uuid,
        "userUuid": project.user_uuid,
        "dates": {
            "begin": format_datetime(report.dates.begin),
            "end": format_datetime(report.dates.end),
        },
        "budget": {
            "total": format_brl(report.budget.total),
            "cost": format_brl(report.budget.cost),
            "revenue": format_brl(report.budget.revenue),
        },
        "tx": {
            "income": format_brl(report.tx.income),
            "expense": format_brl(report.tx.expense),
            "revenue": format_brl(report.tx.revenue),
        },
        "proj": {
            "total": format_brl(report.proj.total),
            "cost": format_brl(report.proj.cost),
            "revenue": format_brl(report.proj.revenue),
        },
    }


def transaction_to_dict(transaction: Transaction) -> dict[str, Any]:
    return {
        "uuid": transaction.uuid,
        "kind": transaction.kind.value,
        "name": transaction.name,
        "description": transaction.description,
        "register": format_datetime(transaction.register),
        "date": format_datetime(transaction.date),
        "amount": format_brl(transaction.amount),
        "userUuid": transaction.user_uuid,
        "projectUuid": transaction.project_uuid,
        "supplierUuid": transaction.supplier_uuid,
        "clientUuid": transaction.client_uuid,
        "installment": (
            format_brl(transaction.installment) if transaction.installment is not None else None
        ),
        "months": transaction.months,
    }
