from sqlalchemy import inspect
from healthtracker.app import create_app, db
from healthtracker.tracker import HealthTracker
from healthtracker.validation import EXPORT_HEADER

def test_testing_config(app):
    assert app.config['TESTING'] is True
    assert app.config['SQLALCHEMY_DATABASE_URI'] == 'sqlite:///:memory:'
    assert app.config['BCRYPT_LOG_ROUNDS'] == 4

def test_development_config_from_environment(monkeypatch, tmp_path):
    database = tmp_path / 'tracker.db'
    monkeypatch.setenv('DATABASE_URL', f'sqlite:///{database}')
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    monkeypatch.setenv('BCRYPT_LOG_ROUNDS', '5')

    app = create_app()

    assert app.config['SQLALCHEMY_DATABASE_URI'] == f'sqlite:///{database}'
    assert app.config['LOG_LEVEL'] == 'DEBUG'
    assert app.config['BCRYPT_LOG_ROUNDS'] == 5
    assert not app.config.get('TESTING')

def test_overrides_are_applied_last():
    app = create_app('testing', {'BCRYPT_LOG_ROUNDS': 6})

    assert app.config['BCRYPT_LOG_ROUNDS'] == 6

def test_init_db_command(monkeypatch, tmp_path):
    database = tmp_path / 'tracker.db'
    app = create_app('testing', {'SQLALCHEMY_DATABASE_URI': f'sqlite:///{database}'})

    result = app.test_cli_runner().invoke(args=['init-db'])

    assert result.exit_code == 0
    assert 'Initialized the database.' in result.output
    with app.app_context():
        assert set(inspect(db.engine).get_table_names()) >= {'users', 'health_records'}

def test_export_records_command(app, tmp_path):
    tracker = HealthTracker()
    tracker.register('alice', 'pw1', 'Alice', 'Lee')
    record_id = tracker.add_record('70', '36.6', '120/80', 'feeling fine')
    output = tmp_path / 'records.csv'

    result = app.test_cli_runner().invoke(
        args=['export-records', 'alice', '--password', 'pw1', '--output', str(output)])

    assert result.exit_code == 0, result.output
    lines = output.read_text(encoding='utf-8').splitlines()
    assert lines[0] == EXPORT_HEADER
    assert lines[1].startswith(f'{record_id},')
    assert lines[1].endswith(',70.0,36.6,120/80,feeling fine')

def test_export_records_command_rejects_bad_password(app):
    HealthTracker().register('alice', 'pw1', 'Alice', 'Lee')

    result = app.test_cli_runner().invoke(
        args=['export-records', 'alice', '--password', 'nope'])

    assert result.exit_code != 0
    assert 'Invalid username or password' in result.output
