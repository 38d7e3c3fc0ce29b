from sqlalchemy.orm import Session

from search_portal.models.brand import Brand
from search_portal.core.security import generate_id


def create(
    db: Session,
    name: str,
    *,
    industry: str | None = None,
    keywords: list[str] | None = None,
    risk_level: str = "medium",
    created_by: str | None = None,
) -> Brand:
    brand = Brand(
        id=generate_id(),
        name=name,
        industry=industry,
        keywords=list(keywords or []),
        risk_level=risk_level,
        created_by=created_by,
    )
    db.add(brand)
    db.commit()
    db.refresh(brand)
    return brand


def get_all(db: Session) -> list[Brand]:
    return db.query(Brand).order_by(Brand.created_at.desc()).all()


def get_by_id(db: Session, brand_id: str) -> Brand | None:
    return db.query(Brand).filter(Brand.id == brand_id).first()


def get_by_name(db: Session, name: str) -> Brand | None:
    return db.query(Brand).filter(Brand.name == name).first()


def update(
    db: Session,
    brand_id: str,
    *,
    name: str | None = None,
    industry: str | None = None,
    keywords: list[str] | None = None,
    risk_level: str | None = None,
    is_active: bool | None = None,
) -> Brand | None:
    brand = get_by_id(db, brand_id)
    if not brand:
        return None
    if name is not None:
        brand.name = name
    if industry is not None:
        brand.industry = industry or None
    if keywords is not None:
        brand.keywords = list(keywords)
    if risk_level is not None:
        brand.risk_level = risk_level
    if is_active is not None:
        brand.is_active = is_active
    db.commit()
    db.refresh(brand)
    return brand


def delete_one(db: Session, brand_id: str) -> bool:
    brand = get_by_id(db, brand_id)
    if not brand:
        return False
    db.delete(brand)
    db.commit()
    return True
