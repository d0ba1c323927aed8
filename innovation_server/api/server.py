from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError

from innovation_server.auth import issue_token, require_admin, verify_jwt
from innovation_server.auth.crud import (
    bootstrap_admin_if_needed,
    create_user_if_absent,
    delete_user,
    get_user_by_email,
    list_users,
    update_user_role,
)
from innovation_server.auth.deps import get_cfg, get_db
from innovation_server.config import Config, load_config
from innovation_server.db import connect, ensure_indexes, get_database, ping
from innovation_server.errors import InternalError, NotFound, install_error_handlers
from innovation_server.models import (
    CreateUserRequest,
    MessageResponse,
    TokenResponse,
    UpdateRoleRequest,
)
from innovation_server.products.crud import create_product, get_product, list_products


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


def create_app(cfg: Optional[Config] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application.

    Pass `database` to inject an existing handle (tests use mongomock). Without
    it the app builds its own MongoClient from `cfg.MONGO_URI` and pings it on
    startup.
    """
    cfg = cfg or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Make config + database available to auth deps.
        app.state.cfg = cfg

        client = None
        db = database
        if db is None:
            _debug(f"Connecting to MongoDB database {cfg.MONGO_DB_NAME}")
            client = connect(cfg.MONGO_URI, strict=cfg.MONGO_SERVER_API_STRICT)
            db = get_database(client, cfg.MONGO_DB_NAME)
            ping(client)
        app.state.db = db

        try:
            ensure_indexes(db)
            boot = bootstrap_admin_if_needed(cfg, db)
            if boot:
                _debug(f"Bootstrapped admin user: email={boot.get('email')}")
        except PyMongoError as e:
            # Keep serving; requests will surface persistence errors as 500s.
            _debug(f"Startup database setup failed: {e}")

        _debug(f"Innovation server is live on port {cfg.PORT}")
        try:
            yield
        finally:
            if client is not None:
                client.close()

    app = FastAPI(title="Innovation Server", version="0.1.0", lifespan=lifespan)
    install_error_handlers(app)

    origins = cfg.cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            # Browsers reject credentials with a wildcard origin.
            allow_credentials="*" not in origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    _register_routes(app)
    return app


def _register_routes(app: FastAPI) -> None:
    # -----------------------------
    # Health
    # -----------------------------

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Innovation server is running!"

    # -----------------------------
    # Tokens
    # -----------------------------

    @app.post("/jwt", response_model=TokenResponse)
    def create_token(
        payload: Dict[str, Any] = Body(...),
        cfg: Config = Depends(get_cfg),
    ) -> Dict[str, Any]:
        """Sign whatever claims the caller sends (normally `{"email": ...}`)."""
        try:
            token = issue_token(
                payload,
                secret=cfg.ACCESS_TOKEN_SECRET,
                expires_in=timedelta(days=cfg.ACCESS_TOKEN_EXPIRE_DAYS),
            )
        except ValueError as e:
            _debug(f"token not issued: {e}")
            raise InternalError()
        return {"token": token}

    # -----------------------------
    # Users
    # -----------------------------

    @app.get("/users")
    def users_index(
        email: Optional[str] = Query(None),
        name: Optional[str] = Query(None),
        role: Optional[str] = Query(None),
        db: Database = Depends(get_db),
    ) -> List[Dict[str, Any]]:
        return list_users(db, email=email, name=name, role=role)

    @app.get("/users/{role}/{email}")
    def users_check_role(
        role: str,
        email: str,
        decoded: Dict[str, Any] = Depends(verify_jwt),
        db: Database = Depends(get_db),
    ) -> Dict[str, bool]:
        """Tell the caller whether *they* hold `role`.

        Asking about anyone else always answers false, without a lookup.
        """
        if email != decoded.get("email"):
            return {role: False}

        user = get_user_by_email(db, email)
        return {role: user is not None and user.get("role") == role}

    @app.patch("/users/{email}", response_model=MessageResponse)
    def users_update_role(
        email: str,
        payload: UpdateRoleRequest,
        _admin: Dict[str, Any] = Depends(require_admin),
        db: Database = Depends(get_db),
    ) -> Dict[str, Any]:
        try:
            update_user_role(db, email, payload.role)
        except PyMongoError as e:
            _debug(f"role update failed for {email}: {e}")
            raise InternalError()
        return {"message": "User role updated successfully"}

    @app.post("/users")
    def users_create(payload: CreateUserRequest, db: Database = Depends(get_db)) -> Dict[str, Any]:
        result = create_user_if_absent(db, payload.model_dump(exclude_none=True))
        if result is None:
            return {"message": "user already exists"}
        return result

    # TODO: no admin check here; waiting on the product owner to confirm who may delete users.
    @app.delete("/users/{user_id}")
    def users_delete(
        user_id: str,
        _decoded: Dict[str, Any] = Depends(verify_jwt),
        db: Database = Depends(get_db),
    ) -> Dict[str, Any]:
        return delete_user(db, user_id)

    # -----------------------------
    # Products
    # -----------------------------

    @app.post("/products")
    def products_create(
        payload: Dict[str, Any] = Body(...),
        db: Database = Depends(get_db),
    ) -> Dict[str, Any]:
        return create_product(db, payload)

    @app.get("/products")
    def products_index(db: Database = Depends(get_db)) -> List[Dict[str, Any]]:
        return list_products(db)

    @app.get("/products/{product_id}")
    def products_get(product_id: str, db: Database = Depends(get_db)) -> Dict[str, Any]:
        try:
            product = get_product(db, product_id)
        except PyMongoError as e:
            _debug(f"product lookup failed for {product_id}: {e}")
            raise InternalError()
        if product is None:
            raise NotFound("product not found")
        return product


app = create_app()
