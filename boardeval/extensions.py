from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_wtf.csrf import CSRFProtect
from redis import Redis
from redis.exceptions import RedisError


class RedisWrapper:
    """Optional Redis connection shared by the ballot lock.

    Without REDIS_URL (dev machine, tests) `client` stays None and callers
    fall back to process-local locking.
    """

    def __init__(self):
        self.client = None

    def init_app(self, app):
        url = app.config.get("REDIS_URL")
        if not url:
            self.client = None
            return
        try:
            self.client = Redis.from_url(url, socket_connect_timeout=1)
            self.client.ping()
        except RedisError:
            app.logger.warning("Redis unavailable at %s, ballot locks are process-local", url)
            self.client = None


db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
csrf = CSRFProtect()
redis_store = RedisWrapper()
