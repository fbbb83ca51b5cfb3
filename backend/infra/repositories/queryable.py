from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar
from sqlalchemy import func
from sqlmodel import select

T = TypeVar("T")

# (statement, consume) を受け取り、セッション内で結果を consume して返す関数
Runner = Callable[[Any, Callable[[Any], Any]], Any]


class Queryable(Generic[T]):
    """
    SELECT 文を遅延評価で組み立てるビュー。

    where / order_by などは新しい Queryable を返すだけで DB には触れない。
    all(), first(), one_or_none(), count() またはイテレーションで初めて実行される。
    """

    def __init__(self, statement, runner: Runner):
        self._statement = statement
        self._runner = runner

    def _derive(self, statement) -> "Queryable[T]":
        return Queryable(statement, self._runner)

    @property
    def statement(self):
        return self._statement

    def where(self, *criteria) -> "Queryable[T]":
        return self._derive(self._statement.where(*criteria))

    def filter_by(self, **kwargs) -> "Queryable[T]":
        return self._derive(self._statement.filter_by(**kwargs))

    def order_by(self, *clauses) -> "Queryable[T]":
        return self._derive(self._statement.order_by(*clauses))

    def limit(self, limit: int) -> "Queryable[T]":
        return self._derive(self._statement.limit(limit))

    def offset(self, offset: int) -> "Queryable[T]":
        return self._derive(self._statement.offset(offset))

    def all(self) -> List[T]:
        return self._runner(self._statement, lambda result: result.all())

    def first(self) -> Optional[T]:
        return self._runner(self._statement.limit(1), lambda result: result.first())

    def one_or_none(self) -> Optional[T]:
        """2件以上ヒットした場合は sqlalchemy.exc.MultipleResultsFound"""
        return self._runner(self._statement, lambda result: result.one_or_none())

    def count(self) -> int:
        count_stmt = select(func.count()).select_from(self._statement.subquery())
        return self._runner(count_stmt, lambda result: result.one())

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())
