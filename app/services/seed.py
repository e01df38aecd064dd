"""Demo data: reference cities/neighborhoods, service types, technicians, teams, orders."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud

logger = logging.getLogger(__name__)

SERVICE_TYPES = [
    "ATIVAÇÃO", "LOSS", "UPGRADE", "T.EQUIPAMENTO",
    "SEM CONEXÃO", "LENTIDÃO", "CONFG. ROTEADOR",
]

NEIGHBORHOODS = {
    "UBA-MG": [
        "Aeroporto", "Centro", "Santa Cruz", "Bom Pastor", "Jardim Primavera",
        "São Pedro", "Bela Vista", "Industrial", "Peluso", "Laranjal",
        "Universitário", "Palmeiras", "Cristal", "Santa Terezinha", "São José", "Vitória",
    ],
    "TOCANTINS-MG": ["CENTRO", "BOA VISTA", "PATRIMONIO", "GRAMA", "FLORESTA"],
}

TECHNICIANS = [
    ("Hugo Silva", ["UBA-MG"], ["Centro", "Santa Cruz", "Bom Pastor"]),
    ("Shelbert Costa", ["UBA-MG"], ["Centro", "Jardim Primavera", "São Pedro"]),
    ("Victor Fernandes", ["UBA-MG", "TOCANTINS-MG"], ["Centro", "Bela Vista", "CENTRO"]),
    ("Everton Rodrigues", ["UBA-MG"], ["Industrial", "Peluso", "Laranjal"]),
    ("Daniel Santos", ["TOCANTINS-MG"], ["CENTRO", "BOA VISTA", "PATRIMONIO"]),
    ("Wesley Almeida", ["UBA-MG"], ["Santa Terezinha", "São José", "Vitória"]),
]

TEAMS = [
    ("EQUIPE 1", "CAIXA-01", "Não pode passar do horário"),
    ("EQUIPE 2", "CAIXA-02", "Disponível apenas pela manhã"),
    ("EQUIPE 3", "CAIXA-03", ""),
]


async def seed_demo_data(db: AsyncSession, today: date | None = None) -> bool:
    """Populate an empty database. Returns False when data already exists."""
    if await crud.list_cities(db, active_only=False):
        logger.info("Reference data already present, skipping seed")
        return False

    today = today or date.today()

    cities = {}
    for city_name, names in NEIGHBORHOODS.items():
        city = await crud.create_city(db, city_name)
        cities[city_name] = city
        await crud.create_neighborhoods(db, names, city.id)

    for name in SERVICE_TYPES:
        await crud.create_service_type(db, name)

    techs = [
        await crud.create_technician(db, name, cities=c, neighborhoods=n)
        for name, c, n in TECHNICIANS
    ]

    teams = []
    for i, (name, box, notes) in enumerate(TEAMS):
        members = [techs[2 * i].id, techs[2 * i + 1].id]
        teams.append(await crud.create_team(db, name, members, box, notes=notes or None))

    uba = cities["UBA-MG"]
    centro = next(
        nb for nb in await crud.list_neighborhoods(db, city_id=uba.id) if nb.name == "Centro"
    )
    await crud.create_service_order(
        db, code="139390", type="ATIVAÇÃO", status="Concluído", team_id=teams[0].id,
        alert="Ligar 15 minutos antes",
        scheduled_date=today.isoformat(), scheduled_time="08:00",
        customer_name="João Silva", customer_phone="(34) 99999-1234",
        address="Rua das Flores, 123 - Centro", description="Ativação de linha residencial",
        city_id=uba.id, neighborhood_id=centro.id,
    )
    await crud.create_service_order(
        db, code="333333", type="T.EQUIPAMENTO", team_id=teams[1].id,
        scheduled_date=today.isoformat(), scheduled_time="14:30", city_id=uba.id,
    )
    await crud.create_service_order(
        db, code="114181", type="SEM CONEXÃO", team_id=teams[0].id,
        alert="Equipamento especial necessário",
        scheduled_date=(today + timedelta(days=1)).isoformat(), scheduled_time="09:30",
        customer_name="Carlos Oliveira", customer_phone="(34) 77777-9999",
        created_via_calendar=True,
    )

    logger.info("Seeded %d cities, %d technicians, %d teams", len(cities), len(techs), len(teams))
    return True
