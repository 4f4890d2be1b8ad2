pytest_plugins = [
    "tests.fixtures.db_client",
    "tests.fixtures.s3_fixtures",
    "tests.fixtures.app_fixtures",
]
