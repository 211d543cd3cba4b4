"""SQLAlchemy models for yottaerp database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(14, 2)
QUANTITY = Numeric(14, 4)
RATE = Numeric(6, 4)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Organization(Base):
    """Tenant model."""

    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Warehouse(Base):
    """Warehouse model."""

    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("organization_id", "code", name="uq_warehouse_code"),)


class ProductType(Base):
    """Product type model. Decides whether products are stock managed."""

    __tablename__ = "product_types"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    code = Column(String, nullable=False)
    description = Column(String, nullable=False)
    manage_stock = Column(Boolean, default=True, nullable=False)

    __table_args__ = (UniqueConstraint("organization_id", "code", name="uq_product_type_code"),)

    products = relationship("Product", back_populates="product_type")


class Product(Base):
    """Product model."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    code = Column(String, nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    price = Column(MONEY, nullable=False)
    vat_rate = Column(RATE, nullable=False)
    product_type_id = Column(Integer, ForeignKey("product_types.id"), nullable=True)
    default_warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=True)

    __table_args__ = (UniqueConstraint("organization_id", "code", name="uq_product_code"),)

    product_type = relationship("ProductType", back_populates="products")


class DocumentTypeConfig(Base):
    """Document type configuration model."""

    __tablename__ = "document_types"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    code = Column(String, nullable=False)
    description = Column(String, nullable=False)
    numerator_code = Column(String, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    inventory_movement = Column(Boolean, default=False, nullable=False)
    valuation_impact = Column(Boolean, default=False, nullable=False)
    operation_sign_stock = Column(Integer, nullable=True)
    operation_sign_valuation = Column(Integer, nullable=True)

    __table_args__ = (UniqueConstraint("organization_id", "code", name="uq_document_type_code"),)


class PaymentCondition(Base):
    """Payment condition model."""

    __tablename__ = "payment_conditions"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    name = Column(String, nullable=False)
    days_to_first_due = Column(Integer, default=0, nullable=False)
    gap_between_dues = Column(Integer, default=0, nullable=False)
    number_of_dues = Column(Integer, default=1, nullable=False)
    is_end_of_month = Column(Boolean, default=False, nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (UniqueConstraint("organization_id", "name", name="uq_payment_condition_name"),)


class Document(Base):
    """Document header model."""

    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint(
            "organization_id", "numerator_code", "number", name="uq_document_series_number"
        ),
    )

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    document_type_id = Column(Integer, ForeignKey("document_types.id"), nullable=False)
    category = Column(String, nullable=False)
    numerator_code = Column(String, nullable=False)
    number = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    main_warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=True)
    payment_condition_id = Column(Integer, ForeignKey("payment_conditions.id"), nullable=True)
    notes = Column(String, nullable=True)
    net_total = Column(MONEY, nullable=False)
    vat_total = Column(MONEY, nullable=False)
    gross_total = Column(MONEY, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    document_type = relationship("DocumentTypeConfig")
    lines = relationship(
        "DocumentLine",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="DocumentLine.line_number",
    )
    deadlines = relationship(
        "PaymentDeadline",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="PaymentDeadline.installment_number",
    )


class DocumentLine(Base):
    """Document line model."""

    __tablename__ = "document_lines"

    id = Column(Integer, primary_key=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
    line_number = Column(Integer, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=True)
    product_code = Column(String, nullable=False, default="")
    description = Column(String, nullable=False, default="")
    quantity = Column(QUANTITY, nullable=False)
    unit_price = Column(MONEY, nullable=False)
    vat_rate = Column(RATE, nullable=False)
    net_amount = Column(MONEY, nullable=False)
    vat_amount = Column(MONEY, nullable=False)
    gross_amount = Column(MONEY, nullable=False)

    document = relationship("Document", back_populates="lines")


class PaymentDeadline(Base):
    """Installment of a document payment schedule."""

    __tablename__ = "payment_deadlines"

    id = Column(Integer, primary_key=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
    installment_number = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False)
    amount = Column(MONEY, nullable=False)

    __table_args__ = (
        UniqueConstraint("document_id", "installment_number", name="uq_deadline_installment"),
    )

    document = relationship("Document", back_populates="deadlines")


class StockMovement(Base):
    """Stock movement model. Stock is the sum of these, never stored."""

    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False)
    quantity = Column(QUANTITY, nullable=False)
    movement_type = Column(String, nullable=False)
    document_type_id = Column(Integer, ForeignKey("document_types.id"), nullable=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=True)
    document_number = Column(String, nullable=True)
    line_number = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
