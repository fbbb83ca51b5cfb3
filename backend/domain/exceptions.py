from typing import Optional


class RepositoryError(RuntimeError):
    """リポジトリ層の例外の基底クラス"""


class InvalidArgumentError(RepositoryError, ValueError):
    """必須の引数が None など不正な場合。何もステージ・コミットされていない"""

    def __init__(self, argument: str, message: Optional[str] = None):
        self.argument = argument
        super().__init__(message or f"Argument '{argument}' must not be None")


class PersistenceError(RepositoryError):
    """
    DB がステージされた変更を拒否した、または実行に失敗した場合。

    message は元の例外のメッセージそのまま、cause は元の例外 (__cause__ にも連結)。
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)
