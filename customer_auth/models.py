"""Database models for customers and their auth sessions."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base, relationship

from . import domain, util

Base = declarative_base()


class DBCustomer(Base):  # type: ignore
    """
    Customer table.

    +----------------+--------------+------+-----+----------------+
    | Field          | Type         | Null | Key | Extra          |
    +----------------+--------------+------+-----+----------------+
    | id             | int          | NO   | PRI | auto_increment |
    | uuid           | varchar(200) | NO   | UNI |                |
    | firstname      | varchar(30)  | NO   |     |                |
    | lastname       | varchar(30)  | YES  |     |                |
    | email          | varchar(50)  | NO   | UNI |                |
    | contact_number | varchar(30)  | NO   | UNI |                |
    | password       | varchar(255) | NO   |     |                |
    | salt           | varchar(255) | NO   |     |                |
    +----------------+--------------+------+-----+----------------+
    """

    __tablename__ = 'customer'

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(String(200), nullable=False, unique=True, index=True)
    firstname = Column(String(30), nullable=False)
    lastname = Column(String(30))
    email = Column(String(50), nullable=False, unique=True)
    contact_number = Column(String(30), nullable=False, unique=True,
                            index=True)
    password = Column(String(255), nullable=False)
    """Hex password digest."""
    salt = Column(String(255), nullable=False)

    flat_buil_number = Column(String(255))
    locality = Column(String(255))
    city = Column(String(30))
    pincode = Column(String(30))
    state_name = Column(String(30))

    ADDRESS_FIELDS = [
        ('flat_building_number', 'flat_buil_number'),
        ('locality', 'locality'),
        ('city', 'city'),
        ('pincode', 'pincode'),
        ('state_name', 'state_name'),
    ]
    """Pairs of (:class:`.domain.Address` field, column)."""

    def to_domain(self) -> domain.Customer:
        """Build the public view of this customer, without credentials."""
        address = None
        if any(getattr(self, column) is not None
               for _, column in self.ADDRESS_FIELDS):
            address = domain.Address(**{
                field: getattr(self, column) or ''
                for field, column in self.ADDRESS_FIELDS
            })
        return domain.Customer(
            customer_id=self.uuid,
            first_name=self.firstname,
            last_name=self.lastname,
            email=self.email,
            contact_number=self.contact_number,
            address=address
        )


class DBCustomerAuth(Base):  # type: ignore
    """
    One login session. Rows are never deleted.

    Times are UNIX epoch seconds. ``logout_at`` is NULL until the customer
    logs out, and is never reset.
    """

    __tablename__ = 'customer_auth'

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(String(200), nullable=False, unique=True)
    customer_id = Column(ForeignKey('customer.id'), nullable=False,
                         index=True)
    access_token = Column(String(500), nullable=False, unique=True,
                          index=True)
    login_at = Column(Integer, nullable=False)
    expires_at = Column(Integer, nullable=False)
    logout_at = Column(Integer, nullable=True)

    customer = relationship('DBCustomer', lazy='joined')

    def to_domain(self) -> domain.Session:
        """Build the domain session, with its owning customer."""
        logout_at = None
        if self.logout_at is not None:
            logout_at = util.from_epoch(self.logout_at)
        return domain.Session(
            session_id=self.uuid,
            customer=self.customer.to_domain(),
            access_token=self.access_token,
            login_at=util.from_epoch(self.login_at),
            expires_at=util.from_epoch(self.expires_at),
            logout_at=logout_at
        )
