SCHEMA_VERSION = 1

# 初回起動時に投入する設定値 (既存の値は上書きしない)
DEFAULT_SETTINGS = {
    "site.title": "Green",
    "site.description": "A small social network",
    "site.language": "en",
    "users.allow_registration": "true",
    "posts.page_size": "20",
}
