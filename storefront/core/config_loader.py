"""
Storefront Core - Config Loader Implementation
Charge la configuration depuis fichiers YAML et résout les secrets.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .config_validator import ConfigValidator
from .interfaces import (
    AuthSettings,
    CatalogSettings,
    IConfigLoader,
    IConfigValidator,
    LoggingSettings,
    StorefrontConfig,
)


class ConfigIntegrityError(Exception):
    """Erreur d'intégrité de configuration."""

    pass


class ConfigLoader(IConfigLoader):
    """
    Chargement des configurations depuis fichiers YAML.

    Le secret de signature n'est jamais lu depuis le fichier: la clé
    `auth.token_secret_env` nomme la variable d'environnement qui le porte (TOK_004).

    Example:
        loader = ConfigLoader("config")
        config = loader.load("default")
    """

    DEFAULT_SECRET_ENV: str = "STOREFRONT_TOKEN_SECRET"

    def __init__(
        self,
        configs_path: str = "config",
        validator: Optional[IConfigValidator] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            configs_path: Dossier contenant les fichiers <environment>.yaml
            validator: Validateur de règles (défaut: ConfigValidator)
            environ: Source des variables d'environnement (défaut: os.environ)
        """
        self.configs_path = Path(configs_path)
        self._validator = validator or ConfigValidator()
        self._environ = environ if environ is not None else os.environ

    def load(self, environment: str) -> StorefrontConfig:
        """
        Charge la config d'un environnement.

        Args:
            environment: Nom de l'environnement (nom du fichier sans extension)

        Returns:
            Configuration résolue et validée

        Raises:
            ConfigIntegrityError: Si fichier inexistant, structure ou règles invalides
        """
        config_file = self.configs_path / f"{environment}.yaml"

        if not config_file.exists():
            raise ConfigIntegrityError(f"Configuration non trouvée pour environnement: {environment}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigIntegrityError(f"Erreur de parsing YAML: {e}")
        except OSError as e:
            raise ConfigIntegrityError(f"Erreur de lecture fichier: {e}")

        if not isinstance(raw, dict):
            raise ConfigIntegrityError("Configuration doit être un objet YAML")

        self._validate_basic_structure(raw)
        self._resolve_secret(raw)

        result = self._validator.validate(raw)
        if not result.valid:
            details = "; ".join(f"{e.rule_id}: {e.message}" for e in result.errors)
            raise ConfigIntegrityError(f"Configuration invalide: {details}")

        return self._build(raw, environment)

    def _validate_basic_structure(self, config: Dict[str, Any]) -> None:
        """Valide la structure de base de la configuration."""
        required_fields = ["version", "auth", "catalog"]

        for field_name in required_fields:
            if field_name not in config:
                raise ConfigIntegrityError(f"Champ obligatoire manquant: {field_name}")

        if not isinstance(config["version"], str):
            raise ConfigIntegrityError("version doit être une chaîne")

        for section in ("auth", "catalog"):
            if not isinstance(config[section], dict):
                raise ConfigIntegrityError(f"{section} doit être un objet")

        if "token_secret" in config["auth"]:
            raise ConfigIntegrityError("auth.token_secret interdit dans le fichier, utiliser auth.token_secret_env")

        logging_section = config.get("logging", {})
        if not isinstance(logging_section, dict):
            raise ConfigIntegrityError("logging doit être un objet")

    def _resolve_secret(self, config: Dict[str, Any]) -> None:
        """Injecte le secret depuis l'environnement dans la section auth."""
        env_name = config["auth"].get("token_secret_env", self.DEFAULT_SECRET_ENV)
        secret = self._environ.get(env_name)

        if not secret:
            raise ConfigIntegrityError(f"Variable d'environnement absente: {env_name}")

        config["auth"]["token_secret"] = secret

    def _build(self, config: Dict[str, Any], environment: str) -> StorefrontConfig:
        """Construit la configuration typée."""
        auth = config["auth"]
        catalog = config["catalog"]
        logging_section = config.get("logging", {})

        return StorefrontConfig(
            version=config["version"],
            environment=environment,
            auth=AuthSettings(
                token_secret=auth["token_secret"],
                token_ttl_seconds=auth.get("token_ttl_seconds", 900),
                pbkdf2_iterations=auth.get("pbkdf2_iterations", 600_000),
                min_password_length=auth.get("min_password_length", 8),
                max_failed_logins=auth.get("max_failed_logins", 5),
                lockout_minutes=auth.get("lockout_minutes", 15),
            ),
            catalog=CatalogSettings(
                allowed_limits=tuple(catalog.get("allowed_limits", [10, 20, 50])),
                default_limit=catalog.get("default_limit", 10),
            ),
            logging=LoggingSettings(
                min_level=str(logging_section.get("min_level", "INFO")).upper(),
                mask_sensitive=bool(logging_section.get("mask_sensitive", True)),
            ),
        )
