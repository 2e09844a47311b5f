pytest_plugins = [
    "tests.fixtures.frame_fixtures",
    "tests.fixtures.server_fixtures",
    "tests.fixtures.settings_fixtures",
]
