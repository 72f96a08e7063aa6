from salesdash.services.dashboard_service import current_dashboard
from salesdash.services.storage_service import SqlKeyValueStore


def test_data_init_seeds_users(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['data', 'init'])

    assert result.exit_code == 0
    assert "PASS Store ready with 2 user(s)" in result.output
    assert len(SqlKeyValueStore().get_json('dashboard_users')) == 2


def test_users_create_and_list(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['users', 'create', '--username', 'alice', '--password', 'pw'])
    assert "PASS Created alice (user)" in result.output

    result = runner.invoke(args=['users', 'create', '--username', 'alice', '--password', 'pw'])
    assert "FAIL" in result.output

    result = runner.invoke(args=['users', 'list'])
    assert "alice" in result.output
    assert "admin-1" in result.output


def test_sales_summary(app):
    dashboard = current_dashboard()
    dashboard.ledger.record_sale("Alice", "Pen", 3, 10.0, False, "user-1", "user")
    dashboard.ledger.record_sale("Bob", "Ink", 1, 5.0, True, "user-1", "user")
    runner = app.test_cli_runner()

    result = runner.invoke(args=['sales', 'summary'])

    assert result.exit_code == 0
    assert "Total revenue: 35.00" in result.output
    assert "Unpaid: 30.00 (1 sales)" in result.output
    assert "Pen" in result.output

    result = runner.invoke(args=['sales', 'list', '--owner-id', 'user-1'])
    assert result.output.count("user ") == 2


def test_reset_requires_confirmation(app):
    runner = app.test_cli_runner()
    current_dashboard().ledger.record_sale("Alice", "Pen", 1, 1.0, False, "user-1", "user")

    result = runner.invoke(args=['data', 'reset'], input='n\n')
    assert result.exit_code != 0
    assert SqlKeyValueStore().get_json('dashboard_sales')

    result = runner.invoke(args=['data', 'reset', '--yes'])
    assert result.exit_code == 0
    assert SqlKeyValueStore().get_json('dashboard_sales') is None
    assert len(SqlKeyValueStore().get_json('dashboard_users')) == 2
