# Overview: Pytest coverage for the `flask data` command group.

import json

from vendorhub.stores import get_store


class TestDataCommands:

    def test_init_db(self, app):
        result = app.test_cli_runner().invoke(args=['data', 'init-db'])
        assert result.exit_code == 0
        assert 'Initialized' in result.output

    def test_check_db_prints_counts(self, app):
        result = app.test_cli_runner().invoke(args=['data', 'check-db'])
        assert result.exit_code == 0
        assert 'vendors' in result.output
        assert 'creditNotes' in result.output

    def test_seed_only_into_empty_store(self, app):
        runner = app.test_cli_runner()
        first = runner.invoke(args=['data', 'seed'])
        assert first.exit_code == 0
        assert 'Seeded demo data' in first.output
        seeded = get_store().counts()['vendors']
        assert seeded == 2

        second = runner.invoke(args=['data', 'seed'])
        assert 'nothing seeded' in second.output
        assert get_store().counts()['vendors'] == seeded

    def test_backup_writes_file(self, app, client, vendor, tmp_path):
        target = tmp_path / 'out.json'
        result = app.test_cli_runner().invoke(args=['data', 'backup', '--output', str(target)])
        assert result.exit_code == 0
        document = json.loads(target.read_text())
        assert document['vendors'][0]['name'] == 'Fresh Farms Co.'
        assert 'backupCreated' in document
