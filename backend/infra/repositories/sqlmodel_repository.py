from contextlib import contextmanager
from typing import Any, Iterable, List, Optional, Sequence, Type, TypeVar
from sqlalchemy import inspect
from sqlmodel import Session, SQLModel, select
from domain.exceptions import InvalidArgumentError, PersistenceError
from domain.repositories.repository import Repository
from infra.repositories.queryable import Queryable
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=SQLModel)


class SqlModelRepository(Repository[T]):
    """
    SQLModel/SQLAlchemy によるリポジトリ実装。

    セッションは呼び出し側 (作業単位ごと) が所有し、ここでは参照するだけ。
    更新系の操作は変更を積んだ直後にコミットする。
    失敗時はロールバックして PersistenceError として送出する。
    """

    def __init__(self, session: Session, model: Type[T]):
        self.session = session
        self.model = model
        self._statement = None

    @property
    def entities(self):
        # 初回アクセス時に生成 (ロック無し: セッションは単一所有者前提)
        if self._statement is None:
            self._statement = select(self.model)
        return self._statement

    # --- Read ---

    def get_by_id(self, entity_id: Any) -> Optional[T]:
        if entity_id is None:
            return None
        return self.session.get(self.model, entity_id)

    @property
    def table(self) -> Queryable[T]:
        return Queryable(self.entities, self._run_tracked)

    @property
    def table_no_tracking(self) -> Queryable[T]:
        return Queryable(self.entities, self._run_detached)

    def _run_tracked(self, statement, consume):
        return consume(self.session.exec(statement))

    def _run_detached(self, statement, consume):
        # 別セッションで読み込み、閉じた時点でインスタンスは detached になる
        with Session(self.session.get_bind()) as session:
            return consume(session.exec(statement))

    # --- Write ---

    def insert(self, entity: T) -> None:
        if entity is None:
            raise InvalidArgumentError("entity")
        self._ensure_new(entity, "entity")
        with self._unit_of_work("insert", staged=[entity]):
            self.session.add(entity)

    def insert_many(self, entities: Iterable[T]) -> None:
        items = self._require_all(entities, "entities")
        for entity in items:
            self._ensure_new(entity, "entities")
        with self._unit_of_work("insert", len(items), staged=items):
            # 1件ずつ flush して id を確定させる (コミットは最後に1回)
            for entity in items:
                self.session.add(entity)
                self.session.flush()

    def update(self, entity: T) -> None:
        if entity is None:
            raise InvalidArgumentError("entity")
        self._ensure_tracked(entity, "entity")
        with self._unit_of_work("update"):
            pass

    def update_many(self, entities: Iterable[T]) -> None:
        items = self._require_all(entities, "entities")
        for entity in items:
            self._ensure_tracked(entity, "entities")
        with self._unit_of_work("update", len(items)):
            pass

    def delete(self, entity: T) -> None:
        if entity is None:
            raise InvalidArgumentError("entity")
        self._ensure_persisted(entity, "entity")
        with self._unit_of_work("delete"):
            self.session.delete(self._attach(entity))

    def delete_many(self, entities: Iterable[T]) -> None:
        items = self._require_all(entities, "entities")
        for entity in items:
            self._ensure_persisted(entity, "entities")
        with self._unit_of_work("delete", len(items)):
            for entity in items:
                self.session.delete(self._attach(entity))

    # --- Helpers ---

    @contextmanager
    def _unit_of_work(self, action: str, count: int = 1, staged: Sequence[T] = ()):
        name = self.model.__name__
        try:
            yield
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            self._clear_identifiers(staged)
            logger.error(f"{name} {action} failed, rolled back: {e}")
            raise PersistenceError(str(e), e) from e
        logger.debug(f"{name} {action} committed ({count} entities)")

    def _clear_identifiers(self, staged: Sequence[T]) -> None:
        # flush 時に採番された id はロールバックしても残るため、未保存状態に戻す
        for entity in staged:
            state = inspect(entity, raiseerr=False)
            if state is None or not state.transient:
                continue
            for column in state.mapper.primary_key:
                setattr(entity, state.mapper.get_property_by_column(column).key, None)

    def _require_all(self, entities: Optional[Iterable[T]], argument: str) -> List[T]:
        if entities is None:
            raise InvalidArgumentError(argument)
        items = list(entities)
        if any(entity is None for entity in items):
            raise InvalidArgumentError(argument, f"Argument '{argument}' must not contain None")
        return items

    def _ensure_new(self, entity: T, argument: str) -> None:
        state = inspect(entity, raiseerr=False)
        if state is None:
            raise InvalidArgumentError(argument, f"{type(entity).__name__} is not a mapped entity")
        if state.has_identity:
            raise InvalidArgumentError(
                argument,
                f"{type(entity).__name__} is already persisted (id={state.identity}); use update instead"
            )

    def _ensure_tracked(self, entity: T, argument: str) -> None:
        state = inspect(entity, raiseerr=False)
        if state is None or state.session is not self.session or not (state.persistent or state.pending):
            raise InvalidArgumentError(
                argument,
                f"{type(entity).__name__} is not tracked by this session; "
                "load it through get_by_id or table before updating"
            )
        # 永続化済みエンティティの id は変更不可
        if not state.persistent:
            return
        for column, assigned in zip(state.mapper.primary_key, state.identity):
            key = state.mapper.get_property_by_column(column).key
            added = state.attrs[key].history.added
            if added and added[0] != assigned:
                raise InvalidArgumentError(
                    argument,
                    f"{type(entity).__name__} identifier cannot change once assigned "
                    f"({assigned} -> {added[0]})"
                )

    def _ensure_persisted(self, entity: T, argument: str) -> None:
        state = inspect(entity, raiseerr=False)
        if state is None or not state.has_identity:
            raise InvalidArgumentError(
                argument,
                f"{type(entity).__name__} was never persisted and cannot be deleted"
            )

    def _attach(self, entity: T) -> T:
        if entity in self.session:
            return entity
        # table_no_tracking などで得た detached インスタンスを id で取り込み直す
        return self.session.merge(entity)
