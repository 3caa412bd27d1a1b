# service_orders/choices.py

"""
Closed enumerations shared by the authorization engine and its adapters.

Values are the strings persisted by the storage layer, so converting to
and from storage never changes enum identity.
"""

from django.db import models


class Role(models.TextChoices):
    ADMIN = "ADMIN", "Administrator"
    MANAGER = "GESTOR", "Manager"
    SUPERVISOR = "SUPERVISOR", "Supervisor"
    COORDINATOR = "COORDENADOR", "Coordinator"

    # Procurement
    BUYER_JUNIOR = "COMPRADOR_JUNIOR", "Buyer (junior)"
    BUYER_MID = "COMPRADOR_PLENO", "Buyer (mid)"
    BUYER_SENIOR = "COMPRADOR_SENIOR", "Buyer (senior)"

    # Crew ranks
    COMMANDING_OFFICER = "COMANDANTE", "Commanding officer"
    FIRST_OFFICER = "IMEDIATO", "First officer"
    NAVIGATION_OFFICER = "OQN", "Navigation officer"
    CHIEF_ENGINEER = "CHEFE_MAQUINAS", "Chief engineer"
    ASSISTANT_CHIEF_ENGINEER = "SUB_CHEFE_MAQUINAS", "Assistant chief engineer"
    MACHINERY_OFFICER = "OQM", "Machinery officer"

    # General staff
    ASSISTANT = "ASSISTENTE", "Assistant"
    AUXILIARY = "AUXILIAR", "Auxiliary"
    INTERN = "ESTAGIARIO", "Intern"


class Sector(models.TextChoices):
    ADMINISTRATION = "ADMINISTRACAO", "Administration"
    MAINTENANCE = "MANUTENCAO", "Maintenance"
    OPERATIONS = "OPERACAO", "Operations"
    PROCUREMENT = "SUPRIMENTOS", "Procurement"
    CREW = "TRIPULACAO", "Crew"
    WAREHOUSE = "ALMOXARIFADO", "Warehouse"
    HR = "RH", "Human resources"
    IT = "TI", "IT"
    UNDEFINED = "NAO_DEFINIDO", "Undefined"


class OrderStatus(models.TextChoices):
    PENDING = "PENDENTE", "Pending"
    UNDER_REVIEW = "EM_ANALISE", "Under review"
    APPROVED = "APROVADA", "Approved"
    REJECTED = "RECUSADA", "Rejected"
    PLANNED = "PLANEJADA", "Planned"
    AWAITING_PROCUREMENT = "AGUARDANDO_SUPRIMENTOS", "Awaiting procurement"
    CONTRACTED = "CONTRATADA", "Contracted"
    IN_PROGRESS = "EM_EXECUCAO", "In progress"
    AWAITING_MATERIAL = "AGUARDANDO_MATERIAL", "Awaiting material"
    COMPLETED = "CONCLUIDA", "Completed"
    CANCELLED = "CANCELADA", "Cancelled"


class FieldName(models.TextChoices):
    """Order fields whose editability is restricted beyond the general edit check."""

    # Planning (coordinators)
    PLANNED_START_DATE = "plannedStartDate", "Planned start date"
    PLANNED_END_DATE = "plannedEndDate", "Planned end date"
    SOLUTION_TYPE = "solutionType", "Solution type"
    RESPONSIBLE_CREW = "responsibleCrew", "Responsible crew"
    COORDINATOR_NOTES = "coordinatorNotes", "Coordinator notes"

    # Procurement (buyers)
    CONTRACTED_COMPANY = "contractedCompany", "Contracted company"
    CONTRACT_DATE = "contractDate", "Contract date"
    SERVICE_ORDER_COST = "serviceOrderCost", "Service order cost"
    SUPPLIER_NOTES = "supplierNotes", "Supplier notes"
