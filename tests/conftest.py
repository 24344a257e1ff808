pytest_plugins = ["mp_search.testing.fixtures"]
