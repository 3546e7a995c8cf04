from dependency_injector import containers, providers

container = None

def setup_di_container_from_settings(settings):  # noqa: PLR0915
    """Inicializa o DI container após o Django já estar com settings carregados."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    # ------- IMPORTS QUE USAM DJANGO MODELS -------
    import structlog

    from quezi_core.adapters.repositories.appointment_repo_impl import AppointmentRepoImpl
    from quezi_core.adapters.repositories.organization_repo_impl import (
        OrganizationInviteRepoImpl,
        OrganizationMemberRepoImpl,
        OrganizationRepoImpl,
    )
    from quezi_core.adapters.repositories.professional_profile_repo_impl import ProfessionalProfileRepoImpl
    from quezi_core.adapters.repositories.review_repo_impl import ReviewRepoImpl
    from quezi_core.adapters.repositories.service_repo_impl import ServiceCategoryRepoImpl, ServiceRepoImpl
    from quezi_core.adapters.repositories.user_repo_impl import UserRepoImpl
    from quezi_core.adapters.repositories.verification_token_repo_impl import VerificationTokenRepoImpl

    # ------- COMMANDS -------
    from quezi_core.core.application.commands.appointment_commands import (
        ChangeAppointmentStatusCommand,
        CreateAppointmentCommand,
    )
    from quezi_core.core.application.commands.auth_commands import (
        AuthenticateUserCommand,
        RegisterUserCommand,
        RequestPasswordResetCommand,
        ResetPasswordCommand,
        VerifyEmailCommand,
    )
    from quezi_core.core.application.commands.organization_commands import (
        AcceptInviteCommand,
        CreateOrganizationCommand,
        DeleteOrganizationCommand,
        InviteMemberCommand,
        RemoveMemberCommand,
        UpdateMemberRoleCommand,
        UpdateOrganizationCommand,
    )
    from quezi_core.core.application.commands.professional_profile_commands import (
        CreateProfessionalProfileCommand,
        DeleteProfessionalProfileCommand,
        UpdateProfessionalProfileCommand,
    )
    from quezi_core.core.application.commands.review_commands import (
        CreateReviewCommand,
        DeleteReviewCommand,
        UpdateReviewCommand,
    )
    from quezi_core.core.application.commands.service_commands import (
        CreateCategoryCommand,
        CreateServiceCommand,
        DeleteCategoryCommand,
        DeleteServiceCommand,
        UpdateCategoryCommand,
        UpdateServiceCommand,
    )
    from quezi_core.core.application.commands.user_commands import DeleteUserCommand, UpdateUserCommand
    from quezi_core.core.application.cqrs import CommandBusImpl, QueryBusImpl

    # ------- HANDLERS -------
    from quezi_core.core.application.handlers.appointment_handlers import (
        ChangeAppointmentStatusHandler,
        CreateAppointmentHandler,
        GetAppointmentHandler,
        ListAppointmentsHandler,
    )
    from quezi_core.core.application.handlers.auth_handlers import (
        AuthenticateUserHandler,
        RegisterUserHandler,
        RequestPasswordResetHandler,
        ResetPasswordHandler,
        VerifyEmailHandler,
        VerifyResetTokenHandler,
    )
    from quezi_core.core.application.handlers.organization_handlers import (
        AcceptInviteHandler,
        CreateOrganizationHandler,
        DeleteOrganizationHandler,
        GetOrganizationBySlugHandler,
        GetOrganizationHandler,
        InviteMemberHandler,
        ListOrganizationMembersHandler,
        ListOrganizationsHandler,
        RemoveMemberHandler,
        UpdateMemberRoleHandler,
        UpdateOrganizationHandler,
    )
    from quezi_core.core.application.handlers.professional_profile_handlers import (
        CreateProfessionalProfileHandler,
        DeleteProfessionalProfileHandler,
        GetProfessionalProfileHandler,
        ListProfessionalProfilesHandler,
        TopRatedProfessionalsHandler,
        UpdateProfessionalProfileHandler,
    )
    from quezi_core.core.application.handlers.review_handlers import (
        CreateReviewHandler,
        DeleteReviewHandler,
        GetProfessionalReviewStatsHandler,
        GetReviewByAppointmentHandler,
        GetReviewHandler,
        ListReviewsHandler,
        UpdateReviewHandler,
    )
    from quezi_core.core.application.handlers.service_handlers import (
        CreateCategoryHandler,
        CreateServiceHandler,
        DeleteCategoryHandler,
        DeleteServiceHandler,
        GetCategoryBySlugHandler,
        GetCategoryHandler,
        GetServiceHandler,
        ListCategoriesHandler,
        ListServicesHandler,
        PopularServicesHandler,
        UpdateCategoryHandler,
        UpdateServiceHandler,
    )
    from quezi_core.core.application.handlers.user_handlers import (
        DeleteUserHandler,
        GetAdminStatsHandler,
        GetUserHandler,
        ListUsersHandler,
        UpdateUserHandler,
    )

    # ------- QUERIES -------
    from quezi_core.core.application.queries.appointment_queries import (
        GetAppointmentQuery,
        ListAppointmentsQuery,
    )
    from quezi_core.core.application.queries.auth_queries import VerifyResetTokenQuery
    from quezi_core.core.application.queries.organization_queries import (
        GetOrganizationBySlugQuery,
        GetOrganizationQuery,
        ListOrganizationMembersQuery,
        ListOrganizationsQuery,
    )
    from quezi_core.core.application.queries.professional_profile_queries import (
        GetProfessionalProfileQuery,
        ListProfessionalProfilesQuery,
        TopRatedProfessionalsQuery,
    )
    from quezi_core.core.application.queries.review_queries import (
        GetProfessionalReviewStatsQuery,
        GetReviewByAppointmentQuery,
        GetReviewQuery,
        ListReviewsQuery,
    )
    from quezi_core.core.application.queries.service_queries import (
        GetCategoryBySlugQuery,
        GetCategoryQuery,
        GetServiceQuery,
        ListCategoriesQuery,
        ListServicesQuery,
        PopularServicesQuery,
    )
    from quezi_core.core.application.queries.user_queries import (
        GetAdminStatsQuery,
        GetUserQuery,
        ListUsersQuery,
    )

    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # Infra
        logger           = providers.Singleton(structlog.get_logger)
        event_dispatcher = providers.Singleton(
            'quezi_core.core.domain.services.event_dispatcher.EventDispatcher'
        )

        # CQRS
        command_bus = providers.Singleton(CommandBusImpl, dispatcher=event_dispatcher)
        query_bus   = providers.Singleton(QueryBusImpl)

        # Repositórios
        user_repo               = providers.Singleton(UserRepoImpl)
        token_repo              = providers.Singleton(VerificationTokenRepoImpl)
        organization_repo       = providers.Singleton(OrganizationRepoImpl)
        organization_member_repo = providers.Singleton(OrganizationMemberRepoImpl)
        organization_invite_repo = providers.Singleton(OrganizationInviteRepoImpl)
        appointment_repo        = providers.Singleton(AppointmentRepoImpl)
        review_repo             = providers.Singleton(ReviewRepoImpl)
        professional_profile_repo = providers.Singleton(ProfessionalProfileRepoImpl)
        service_repo            = providers.Singleton(ServiceRepoImpl)
        service_category_repo   = providers.Singleton(ServiceCategoryRepoImpl)

        # Auth
        register_user_handler = providers.Factory(
            RegisterUserHandler,
            user_repo=user_repo,
            token_repo=token_repo,
            verification_ttl_hours=config.email_verification_ttl_hours,
        )
        authenticate_user_handler = providers.Factory(AuthenticateUserHandler, user_repo=user_repo)
        request_password_reset_handler = providers.Factory(
            RequestPasswordResetHandler,
            user_repo=user_repo,
            token_repo=token_repo,
            ttl_hours=config.password_reset_ttl_hours,
        )
        verify_reset_token_handler = providers.Factory(VerifyResetTokenHandler, token_repo=token_repo)
        reset_password_handler     = providers.Factory(ResetPasswordHandler, user_repo=user_repo, token_repo=token_repo)
        verify_email_handler       = providers.Factory(VerifyEmailHandler, user_repo=user_repo, token_repo=token_repo)

        # Usuários
        get_user_handler    = providers.Factory(GetUserHandler,    repo=user_repo)
        list_users_handler  = providers.Factory(ListUsersHandler,  repo=user_repo)
        update_user_handler = providers.Factory(UpdateUserHandler, repo=user_repo)
        delete_user_handler = providers.Factory(DeleteUserHandler, repo=user_repo)
        admin_stats_handler = providers.Factory(
            GetAdminStatsHandler,
            user_repo=user_repo,
            organization_repo=organization_repo,
            appointment_repo=appointment_repo,
            review_repo=review_repo,
        )

        # Organizações
        create_organization_handler = providers.Factory(
            CreateOrganizationHandler, org_repo=organization_repo, member_repo=organization_member_repo
        )
        update_organization_handler = providers.Factory(
            UpdateOrganizationHandler, org_repo=organization_repo, member_repo=organization_member_repo
        )
        delete_organization_handler = providers.Factory(
            DeleteOrganizationHandler, org_repo=organization_repo, member_repo=organization_member_repo
        )
        get_organization_handler         = providers.Factory(GetOrganizationHandler, org_repo=organization_repo)
        get_organization_by_slug_handler = providers.Factory(GetOrganizationBySlugHandler, org_repo=organization_repo)
        list_organizations_handler       = providers.Factory(ListOrganizationsHandler, org_repo=organization_repo)
        list_organization_members_handler = providers.Factory(
            ListOrganizationMembersHandler,
            org_repo=organization_repo,
            member_repo=organization_member_repo,
            user_repo=user_repo,
        )
        invite_member_handler = providers.Factory(
            InviteMemberHandler,
            org_repo=organization_repo,
            member_repo=organization_member_repo,
            invite_repo=organization_invite_repo,
            user_repo=user_repo,
            ttl_days=config.organization_invite_ttl_days,
        )
        accept_invite_handler = providers.Factory(
            AcceptInviteHandler,
            member_repo=organization_member_repo,
            invite_repo=organization_invite_repo,
            user_repo=user_repo,
        )
        update_member_role_handler = providers.Factory(
            UpdateMemberRoleHandler, org_repo=organization_repo, member_repo=organization_member_repo
        )
        remove_member_handler = providers.Factory(
            RemoveMemberHandler, org_repo=organization_repo, member_repo=organization_member_repo
        )

        # Perfis profissionais
        create_professional_profile_handler = providers.Factory(
            CreateProfessionalProfileHandler, repo=professional_profile_repo
        )
        update_professional_profile_handler = providers.Factory(
            UpdateProfessionalProfileHandler, repo=professional_profile_repo
        )
        delete_professional_profile_handler = providers.Factory(
            DeleteProfessionalProfileHandler, repo=professional_profile_repo
        )
        get_professional_profile_handler   = providers.Factory(GetProfessionalProfileHandler,   repo=professional_profile_repo)
        list_professional_profiles_handler = providers.Factory(ListProfessionalProfilesHandler, repo=professional_profile_repo)
        top_rated_professionals_handler    = providers.Factory(
            TopRatedProfessionalsHandler,
            repo=professional_profile_repo,
            min_reviews=config.top_rated_min_reviews,
        )

        # Catálogo
        create_service_handler = providers.Factory(
            CreateServiceHandler, repo=service_repo, category_repo=service_category_repo
        )
        update_service_handler = providers.Factory(
            UpdateServiceHandler, repo=service_repo, category_repo=service_category_repo
        )
        delete_service_handler   = providers.Factory(DeleteServiceHandler,   repo=service_repo)
        get_service_handler      = providers.Factory(GetServiceHandler,      repo=service_repo)
        list_services_handler    = providers.Factory(ListServicesHandler,    repo=service_repo)
        popular_services_handler = providers.Factory(PopularServicesHandler, repo=service_repo)
        create_category_handler  = providers.Factory(CreateCategoryHandler,  category_repo=service_category_repo)
        update_category_handler  = providers.Factory(UpdateCategoryHandler,  category_repo=service_category_repo)
        delete_category_handler  = providers.Factory(DeleteCategoryHandler,  category_repo=service_category_repo)
        get_category_handler     = providers.Factory(GetCategoryHandler,     category_repo=service_category_repo)
        get_category_by_slug_handler = providers.Factory(GetCategoryBySlugHandler, category_repo=service_category_repo)
        list_categories_handler  = providers.Factory(ListCategoriesHandler,  category_repo=service_category_repo)

        # Agendamentos
        create_appointment_handler = providers.Factory(
            CreateAppointmentHandler, repo=appointment_repo, user_repo=user_repo, service_repo=service_repo
        )
        change_appointment_status_handler = providers.Factory(ChangeAppointmentStatusHandler, repo=appointment_repo)
        get_appointment_handler   = providers.Factory(GetAppointmentHandler,   repo=appointment_repo)
        list_appointments_handler = providers.Factory(ListAppointmentsHandler, repo=appointment_repo)

        # Avaliações
        create_review_handler = providers.Factory(
            CreateReviewHandler, repo=review_repo, appointment_repo=appointment_repo
        )
        update_review_handler = providers.Factory(UpdateReviewHandler, repo=review_repo)
        delete_review_handler = providers.Factory(DeleteReviewHandler, repo=review_repo)
        get_review_handler    = providers.Factory(GetReviewHandler,    repo=review_repo)
        get_review_by_appointment_handler = providers.Factory(GetReviewByAppointmentHandler, repo=review_repo)
        list_reviews_handler  = providers.Factory(ListReviewsHandler,  repo=review_repo)
        professional_review_stats_handler = providers.Factory(
            GetProfessionalReviewStatsHandler, repo=review_repo, user_repo=user_repo
        )

        def init(self):  # noqa: PLR0915
            # Bus de comandos
            cmd_bus = self.command_bus()

            cmd_bus.register(RegisterUserCommand, self.register_user_handler())
            cmd_bus.register(AuthenticateUserCommand, self.authenticate_user_handler())
            cmd_bus.register(RequestPasswordResetCommand, self.request_password_reset_handler())
            cmd_bus.register(ResetPasswordCommand, self.reset_password_handler())
            cmd_bus.register(VerifyEmailCommand, self.verify_email_handler())

            cmd_bus.register(UpdateUserCommand, self.update_user_handler())
            cmd_bus.register(DeleteUserCommand, self.delete_user_handler())

            cmd_bus.register(CreateOrganizationCommand, self.create_organization_handler())
            cmd_bus.register(UpdateOrganizationCommand, self.update_organization_handler())
            cmd_bus.register(DeleteOrganizationCommand, self.delete_organization_handler())
            cmd_bus.register(InviteMemberCommand, self.invite_member_handler())
            cmd_bus.register(AcceptInviteCommand, self.accept_invite_handler())
            cmd_bus.register(UpdateMemberRoleCommand, self.update_member_role_handler())
            cmd_bus.register(RemoveMemberCommand, self.remove_member_handler())

            cmd_bus.register(CreateProfessionalProfileCommand, self.create_professional_profile_handler())
            cmd_bus.register(UpdateProfessionalProfileCommand, self.update_professional_profile_handler())
            cmd_bus.register(DeleteProfessionalProfileCommand, self.delete_professional_profile_handler())

            cmd_bus.register(CreateServiceCommand, self.create_service_handler())
            cmd_bus.register(UpdateServiceCommand, self.update_service_handler())
            cmd_bus.register(DeleteServiceCommand, self.delete_service_handler())
            cmd_bus.register(CreateCategoryCommand, self.create_category_handler())
            cmd_bus.register(UpdateCategoryCommand, self.update_category_handler())
            cmd_bus.register(DeleteCategoryCommand, self.delete_category_handler())

            cmd_bus.register(CreateAppointmentCommand, self.create_appointment_handler())
            cmd_bus.register(ChangeAppointmentStatusCommand, self.change_appointment_status_handler())

            cmd_bus.register(CreateReviewCommand, self.create_review_handler())
            cmd_bus.register(UpdateReviewCommand, self.update_review_handler())
            cmd_bus.register(DeleteReviewCommand, self.delete_review_handler())

            # Bus de queries
            qry_bus = self.query_bus()

            qry_bus.register(VerifyResetTokenQuery, self.verify_reset_token_handler())

            qry_bus.register(GetUserQuery, self.get_user_handler())
            qry_bus.register(ListUsersQuery, self.list_users_handler())
            qry_bus.register(GetAdminStatsQuery, self.admin_stats_handler())

            qry_bus.register(GetOrganizationQuery, self.get_organization_handler())
            qry_bus.register(GetOrganizationBySlugQuery, self.get_organization_by_slug_handler())
            qry_bus.register(ListOrganizationsQuery, self.list_organizations_handler())
            qry_bus.register(ListOrganizationMembersQuery, self.list_organization_members_handler())

            qry_bus.register(GetProfessionalProfileQuery, self.get_professional_profile_handler())
            qry_bus.register(ListProfessionalProfilesQuery, self.list_professional_profiles_handler())
            qry_bus.register(TopRatedProfessionalsQuery, self.top_rated_professionals_handler())

            qry_bus.register(GetServiceQuery, self.get_service_handler())
            qry_bus.register(ListServicesQuery, self.list_services_handler())
            qry_bus.register(PopularServicesQuery, self.popular_services_handler())
            qry_bus.register(GetCategoryQuery, self.get_category_handler())
            qry_bus.register(GetCategoryBySlugQuery, self.get_category_by_slug_handler())
            qry_bus.register(ListCategoriesQuery, self.list_categories_handler())

            qry_bus.register(GetAppointmentQuery, self.get_appointment_handler())
            qry_bus.register(ListAppointmentsQuery, self.list_appointments_handler())

            qry_bus.register(GetReviewQuery, self.get_review_handler())
            qry_bus.register(GetReviewByAppointmentQuery, self.get_review_by_appointment_handler())
            qry_bus.register(ListReviewsQuery, self.list_reviews_handler())
            qry_bus.register(GetProfessionalReviewStatsQuery, self.professional_review_stats_handler())

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.password_reset_ttl_hours.from_value(settings.PASSWORD_RESET_TTL_HOURS)
    container.config.email_verification_ttl_hours.from_value(settings.EMAIL_VERIFICATION_TTL_HOURS)
    container.config.organization_invite_ttl_days.from_value(settings.ORGANIZATION_INVITE_TTL_DAYS)
    container.config.top_rated_min_reviews.from_value(settings.TOP_RATED_MIN_REVIEWS)
    Container.init(container)
    return container
