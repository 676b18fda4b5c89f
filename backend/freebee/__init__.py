from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from freebee.main import main
    flask_app.register_blueprint(main)

    from freebee.api.puzzles import puzzles
    flask_app.register_blueprint(puzzles, url_prefix='/api/puzzle')

    from freebee.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    from freebee.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            users = ['testuser1', 'testuser2', 'testuser3']
            for u in users:
                user = User(username=u)
                user.set_password('password')
                db.session.add(user)

            db.session.commit()
            print('Database has been reset and seeded!')

    @click.command('load-puzzle')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def load_puzzle_command(path):
        """Loads a puzzle JSON file and makes it the current puzzle."""
        import json
        from freebee.services.puzzles.source import parse_puzzle, save_puzzle
        with open(path, encoding='utf-8') as fh:
            try:
                puzzle = parse_puzzle(json.load(fh))
            except ValueError as exc:
                raise click.ClickException(str(exc))
        with flask_app.app_context():
            save_puzzle(puzzle)
        flask_app.logger.info(f"[load-puzzle] letters={puzzle.letters} words={len(puzzle.wordlist)}")
        print(f'Loaded puzzle {puzzle.letters} ({len(puzzle.wordlist)} words)')

    @click.command('fetch-puzzle')
    def fetch_puzzle_command():
        """Fetches today's puzzle from PUZZLE_SOURCE_URL."""
        import requests
        from freebee.services.puzzles.source import PuzzleFormatError, fetch_today, save_puzzle
        url = flask_app.config['PUZZLE_SOURCE_URL']
        try:
            puzzle = fetch_today(url, timeout=flask_app.config.get('PUZZLE_FETCH_TIMEOUT_SEC', 10))
        except (requests.RequestException, PuzzleFormatError) as exc:
            raise click.ClickException(f'Could not fetch puzzle from {url}: {exc}')
        with flask_app.app_context():
            save_puzzle(puzzle)
        flask_app.logger.info(f"[fetch-puzzle] letters={puzzle.letters} url={url}")
        print(f'Fetched puzzle {puzzle.letters} ({len(puzzle.wordlist)} words)')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(load_puzzle_command)
    flask_app.cli.add_command(fetch_puzzle_command)

    return flask_app
