from __future__ import annotations

import uuid
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from quezi_core.adapters.config.composition_root import setup_di_container_from_settings
from quezi_core.adapters.security.hash_service import HashService
from quezi_core.core.application.dtos.validators import validate_password
from quezi_core.core.domain.entities.user_entity import UserEntity


class Command(BaseCommand):
    """
    Cria ou atualiza o usuário administrador da plataforma.
    Idempotente: se o e-mail já existir, promove a ADMIN e troca a senha.
    """
    help = "Cria ou atualiza o usuário administrador (ADMIN)."

    def add_arguments(self, parser) -> None:
        parser.add_argument("--email", type=str, required=True, help="Email de login do administrador.")
        parser.add_argument("--password", type=str, required=True, help="Senha do administrador.")
        parser.add_argument("--name", type=str, default="Administrador Quezi", help="Nome do administrador.")

    def handle(self, *args: Any, **opt: Any) -> None:
        self.stdout.write(self.style.NOTICE("--- Iniciando criação do usuário Admin ---"))

        try:
            password = validate_password(opt["password"])
        except ValueError as e:
            raise CommandError(str(e)) from e

        container = setup_di_container_from_settings(settings)
        user_repo = container.user_repo()

        email = opt["email"].strip().lower()
        user = user_repo.find_by_email(email)
        created = user is None
        if created:
            user = UserEntity(id=uuid.uuid4(), email=email, name=opt["name"])

        user.user_type = "ADMIN"
        user.is_active = True
        user.is_email_verified = True
        user.password_hash = HashService.hash_password(password)
        user = user_repo.save(user)

        verb = "criado" if created else "atualizado"
        self.stdout.write(self.style.SUCCESS(
            f"✅ Usuário Admin '{user.email}' {verb} com sucesso. ID: {user.id}"
        ))
