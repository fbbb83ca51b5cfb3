"""
汎用リポジトリのインターフェース。

アプリケーション側はこのインターフェースだけに依存し、
永続化の実装ごとにアダプタを1つ用意する (infra.repositories.sqlmodel_repository)。
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    エンティティの型に依存しない CRUD。
    更新系の操作は変更を積んだあと、戻る前に作業単位をコミットする。
    """

    @abstractmethod
    def get_by_id(self, entity_id: Any) -> Optional[T]:
        """id で1件取得。無ければ None"""

    @abstractmethod
    def insert(self, entity: T) -> None:
        ...

    @abstractmethod
    def insert_many(self, entities: Iterable[T]) -> None:
        ...

    @abstractmethod
    def update(self, entity: T) -> None:
        ...

    @abstractmethod
    def update_many(self, entities: Iterable[T]) -> None:
        ...

    @abstractmethod
    def delete(self, entity: T) -> None:
        ...

    @abstractmethod
    def delete_many(self, entities: Iterable[T]) -> None:
        ...

    @property
    @abstractmethod
    def table(self):
        """セッションで追跡される結果を返す遅延クエリ"""

    @property
    @abstractmethod
    def table_no_tracking(self):
        """読み取り専用の遅延クエリ。結果は追跡されない"""
