"""Request bodies of the REST API.

Field names are camelCase on the wire. Money is accepted as a number or a BRL
string ("R$ 1.000,00"); datetimes as ISO-8601, stored naive in local time.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from budgetit.domain.entities import (
    ActivityInput,
    DoneActivityInput,
    DoneExpenseInput,
    DoneInput,
    ExpenseInput,
    TaskInput,
)
from budgetit.utils.date_parser import to_naive
from budgetit.utils.money import to_decimal

Money = Annotated[Decimal, BeforeValidator(to_decimal)]
LocalDatetime = Annotated[datetime, AfterValidator(to_naive)]


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskExpenseBody(ApiModel):
    uuid: str = ""
    amount: Money = Field(ge=0)


class TaskActivityBody(ApiModel):
    uuid: str = ""
    hourly_rate: Money = Field(ge=0)


class TaskBody(ApiModel):
    """One task of a submitted list; an empty sub-record uuid marks a new task."""

    name: str
    description: str = ""
    finished: bool = False
    begin_date: LocalDatetime
    end_date: LocalDatetime
    revenue: Money
    status_uuid: str
    project_uuid: str
    user_uuid: Optional[str] = None
    budget_uuid: Optional[str] = None
    task_expense: Optional[TaskExpenseBody] = None
    task_activity: Optional[TaskActivityBody] = None

    def to_input(self) -> TaskInput:
        return TaskInput(
            name=self.name,
            description=self.description,
            finished=self.finished,
            begin_date=self.begin_date,
            end_date=self.end_date,
            revenue=self.revenue,
            status_uuid=self.status_uuid,
            project_uuid=self.project_uuid,
            user_uuid=self.user_uuid or None,
            budget_uuid=self.budget_uuid or None,
            expense=(
                ExpenseInput(uuid=self.task_expense.uuid, amount=self.task_expense.amount)
                if self.task_expense is not None
                else None
            ),
            activity=(
                ActivityInput(
                    uuid=self.task_activity.uuid, hourly_rate=self.task_activity.hourly_rate
                )
                if self.task_activity is not None
                else None
            ),
        )


class BudgetTasksUpdate(ApiModel):
    uuid: str
    tasks: list[TaskBody]

    def to_inputs(self) -> list[TaskInput]:
        return [task.to_input() for task in self.tasks]


class TasksUpdate(ApiModel):
    tasks: list[TaskBody]

    def to_inputs(self) -> list[TaskInput]:
        return [task.to_input() for task in self.tasks]


class DoneExpenseBody(ApiModel):
    task_uuid: str
    amount: Money = Field(ge=0)
    date: LocalDatetime
    supplier_uuid: str


class DoneActivityBody(ApiModel):
    task_uuid: str
    begin_date: LocalDatetime
    end_date: LocalDatetime
    hourly_rate: Money = Field(ge=0)


class DoneCreate(ApiModel):
    name: str
    description: str = ""
    user_uuid: str
    done_expense: Optional[DoneExpenseBody] = None
    done_activity: Optional[DoneActivityBody] = None

    def to_input(self) -> DoneInput:
        expense = None
        if self.done_expense is not None:
            expense = DoneExpenseInput(
                task_uuid=self.done_expense.task_uuid,
                amount=self.done_expense.amount,
                date=self.done_expense.date,
                supplier_uuid=self.done_expense.supplier_uuid,
            )
        activity = None
        if self.done_activity is not None:
            activity = DoneActivityInput(
                task_uuid=self.done_activity.task_uuid,
                begin_date=self.done_activity.begin_date,
                end_date=self.done_activity.end_date,
                hourly_rate=self.done_activity.hourly_rate,
            )
        return DoneInput(
            name=self.name,
            description=self.description,
            user_uuid=self.user_uuid,
            expense=expense,
            activity=activity,
        )


class ProjectCreate(ApiModel):
    name: str
    description: str = ""
    client_uuid: str
    status_uuid: str
    user_uuid: Optional[str] = None
    active: bool = True


class ProjectUpdate(ProjectCreate):
    uuid: str


class TransactionCreate(ApiModel):
    """Ledger entry; which optional fields apply depends on the kind."""

    name: str
    description: str = ""
    date: LocalDatetime
    amount: Money = Field(ge=0)
    user_uuid: Optional[str] = None
    project_uuid: Optional[str] = None
    supplier_uuid: Optional[str] = None
    client_uuid: Optional[str] = None
    installment: Optional[Money] = None
    months: Optional[int] = None

