from __future__ import annotations

from ..extensions import db
from vendorhub.time_utils import today, utcnow


# BIGSERIAL on PostgreSQL; SQLite only autoincrements INTEGER primary keys
BigId = db.BigInteger().with_variant(db.Integer, "sqlite")


class Vendor(db.Model):
    """
    Supplier of goods to the store.

    Owns brands, issues and invoices. Deleting a vendor deletes all of them
    (ORM cascade, backed by ON DELETE CASCADE on PostgreSQL).
    """
    __tablename__ = "vendors"
    __table_args__ = (
        db.CheckConstraint("payment_terms IN ('advance', 'credit', 'mixed')", name="ck_vendors_payment_terms"),
        db.CheckConstraint(
            "visit_frequency IN ('daily', 'weekly', 'biweekly', 'monthly')", name="ck_vendors_visit_frequency"
        ),
        db.CheckConstraint("has_display IN ('yes', 'no')", name="ck_vendors_has_display"),
        db.Index("idx_vendors_name", "name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(BigId, primary_key=True)
    name = db.Column(db.String(255), nullable=False)

    # Contact information
    contact_person = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    email = db.Column(db.String(255), nullable=True)

    # Commercial terms
    payment_terms = db.Column(db.String(50), nullable=False, default="advance")
    visit_frequency = db.Column(db.String(50), nullable=False, default="weekly")
    last_visit = db.Column(db.Date, nullable=True)
    next_visit = db.Column(db.Date, nullable=True)
    has_display = db.Column(db.String(10), nullable=False, default="no")
    display_rent = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    terms_conditions = db.Column(db.Text, nullable=True)
    remarks = db.Column(db.Text, nullable=True)

    status = db.Column(db.String(50), nullable=False, default="active")
    date_added = db.Column(db.Date, nullable=False, default=today)

    # Audit fields
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    brands = db.relationship("Brand", back_populates="vendor", cascade="all, delete-orphan")
    issues = db.relationship("Issue", back_populates="vendor", cascade="all, delete-orphan")
    invoices = db.relationship("Invoice", back_populates="vendor", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Vendor id={self.id} name={self.name!r}>"

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "contact_person": self.contact_person,
            "phone": self.phone,
            "email": self.email,
            "payment_terms": self.payment_terms,
            "visit_frequency": self.visit_frequency,
            "last_visit": self.last_visit,
            "next_visit": self.next_visit,
            "has_display": self.has_display,
            "display_rent": self.display_rent,
            "terms_conditions": self.terms_conditions,
            "remarks": self.remarks,
            "status": self.status,
            "date_added": self.date_added,
        }


class Brand(db.Model):
    __tablename__ = "brands"
    __table_args__ = (
        db.CheckConstraint(
            "category IN ('groceries', 'dairy', 'beverages', 'snacks', 'personal_care', "
            "'household', 'bakery', 'frozen', 'other')",
            name="ck_brands_category",
        ),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(BigId, primary_key=True)
    vendor_id = db.Column(BigId, db.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    sku = db.Column(db.String(100), nullable=True)
    category = db.Column(db.String(100), nullable=False, default="groceries")
    date_added = db.Column(db.Date, nullable=False, default=today)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    vendor = db.relationship("Vendor", back_populates="brands")

    def __repr__(self) -> str:
        return f"<Brand id={self.id} name={self.name!r} vendor_id={self.vendor_id}>"

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "vendor_id": self.vendor_id,
            "name": self.name,
            "sku": self.sku,
            "category": self.category,
            "date_added": self.date_added,
        }


class Issue(db.Model):
    """
    Quality or delivery problem logged against a vendor.

    resolved_date is set exactly when status is 'resolved'.
    """
    __tablename__ = "issues"
    __table_args__ = (
        db.CheckConstraint(
            "issue_type IN ('expired', 'damaged', 'defective', 'wrong_delivery', "
            "'poor_quality', 'short_delivery', 'other')",
            name="ck_issues_issue_type",
        ),
        db.CheckConstraint("status IN ('pending', 'resolved')", name="ck_issues_status"),
        db.Index("idx_issues_status", "status"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(BigId, primary_key=True)
    vendor_id = db.Column(BigId, db.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    product_name = db.Column(db.String(255), nullable=False)
    issue_type = db.Column(db.String(100), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    date_found = db.Column(db.Date, nullable=False, default=today)
    estimated_loss = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(50), nullable=False, default="pending")
    resolved_date = db.Column(db.Date, nullable=True)
    date_added = db.Column(db.Date, nullable=False, default=today)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    vendor = db.relationship("Vendor", back_populates="issues")

    def __repr__(self) -> str:
        return f"<Issue id={self.id} status={self.status!r} vendor_id={self.vendor_id}>"

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "vendor_id": self.vendor_id,
            "product_name": self.product_name,
            "issue_type": self.issue_type,
            "quantity": self.quantity,
            "date_found": self.date_found,
            "estimated_loss": self.estimated_loss,
            "description": self.description,
            "status": self.status,
            "resolved_date": self.resolved_date,
            "date_added": self.date_added,
        }
