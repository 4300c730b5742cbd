from sqlalchemy import Column, Integer, String, Numeric, DateTime, Boolean
from distributor.models.base import Base


class TaxDeclaration(Base):
    """
    Tax rate declaration (GST split into CGST/SGST or IGST)

    Order lines reference it by tax_code.
    """
    __tablename__ = "tax_declarations"

    id = Column(Integer, primary_key=True, index=True)
    tax_code = Column(String(50), nullable=False, index=True)
    tax_description = Column(String(255), nullable=False)

    # Validity window
    valid_from = Column(DateTime, nullable=False)
    valid_to = Column(DateTime, nullable=False)

    # Rates in percent
    cgst = Column(Numeric(5, 2), nullable=True)
    sgst = Column(Numeric(5, 2), nullable=True)
    igst = Column(Numeric(5, 2), nullable=True)
    total_percentage = Column(Numeric(5, 2), nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<TaxDeclaration {self.tax_code}>"
