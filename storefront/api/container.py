"""
API: Container

Assemble les collaborateurs du core à partir d'une StorefrontConfig.
Chaque collaborateur peut être remplacé par injection (ex: stores base de données).
"""

from datetime import timedelta
from typing import Optional

from ..auth import (
    CredentialHasher,
    InMemoryUserCredentialStore,
    IUserCredentialStore,
    LoginThrottle,
    LoginUseCase,
    SignupUseCase,
    TokenIssuer,
    VerifyTokenUseCase,
)
from ..catalog import (
    GetProductUseCase,
    InMemoryProductRepository,
    IProductRepository,
    ListProductsUseCase,
    PaginationPolicy,
)
from ..core.interfaces import StorefrontConfig
from ..logging import IStructuredLogger, LogConfig, StructuredLogger, parse_level, stderr_handler


class Container:
    """
    Graphe d'objets de l'application.

    Example:
        container = Container.from_config(ConfigLoader("config").load("default"))
        app = create_app(container)
    """

    def __init__(
        self,
        config: StorefrontConfig,
        logger: IStructuredLogger,
        user_store: IUserCredentialStore,
        product_repository: IProductRepository,
        hasher: CredentialHasher,
        issuer: TokenIssuer,
        pagination: PaginationPolicy,
        throttle: Optional[LoginThrottle] = None,
    ):
        self.config = config
        self.logger = logger
        self.user_store = user_store
        self.product_repository = product_repository
        self.hasher = hasher
        self.issuer = issuer
        self.pagination = pagination
        self.throttle = throttle

        self.signup = SignupUseCase(
            user_store,
            hasher,
            min_password_length=config.auth.min_password_length,
            logger=logger,
        )
        self.login = LoginUseCase(user_store, hasher, issuer, throttle=throttle, logger=logger)
        self.verify_token = VerifyTokenUseCase(issuer)
        self.list_products = ListProductsUseCase(product_repository, pagination, logger=logger)
        self.get_product = GetProductUseCase(product_repository)

    @classmethod
    def from_config(
        cls,
        config: StorefrontConfig,
        logger: Optional[IStructuredLogger] = None,
        user_store: Optional[IUserCredentialStore] = None,
        product_repository: Optional[IProductRepository] = None,
    ) -> "Container":
        """
        Construit le container; les stores par défaut sont en mémoire.

        Raises:
            ValueError: Paramètres incompatibles (secret, TTL, limites)
        """
        if logger is None:
            logger = StructuredLogger(
                "storefront",
                config=LogConfig(
                    min_level=parse_level(config.logging.min_level),
                    mask_sensitive=config.logging.mask_sensitive,
                ),
                output_handler=stderr_handler,
            )

        throttle = None
        if config.auth.max_failed_logins > 0:
            throttle = LoginThrottle(
                max_failures=config.auth.max_failed_logins,
                lockout_duration=timedelta(minutes=config.auth.lockout_minutes),
            )

        return cls(
            config=config,
            logger=logger,
            user_store=user_store if user_store is not None else InMemoryUserCredentialStore(),
            product_repository=(
                product_repository if product_repository is not None else InMemoryProductRepository()
            ),
            hasher=CredentialHasher(iterations=config.auth.pbkdf2_iterations),
            issuer=TokenIssuer(config.auth.token_secret, ttl_seconds=config.auth.token_ttl_seconds),
            pagination=PaginationPolicy(
                allowed_limits=config.catalog.allowed_limits,
                default_limit=config.catalog.default_limit,
            ),
            throttle=throttle,
        )
