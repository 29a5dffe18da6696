"""
Customer identity for the ordering platform.

This package registers customers, checks their passwords, and issues and
verifies time-bounded session tokens. Every other service authorizes a request
by asking :meth:`.SessionEngine.validate` whether the presented access token
belongs to a live session.

Quick start
-----------

.. code-block:: python

   from customer_auth import SessionEngine, store
   from customer_auth.domain import CustomerRegistration

   customers = store.get_store('sqlite:///customers.db')
   customers.create_all()
   engine = SessionEngine(customers)

   engine.register(CustomerRegistration(
       first_name='Asha', email='asha@example.com',
       contact_number='9876543210', password='Abc@123'
   ))
   session = engine.authenticate('9876543210', 'Abc@123')
   customer = engine.validate(session.access_token)
   engine.logout(session.access_token)

Failures raise subclasses of :class:`.exceptions.CustomerError`, each with a
stable ``code`` such as ``SGR-001`` or ``ATHR-003``.
"""

from .domain import Address, Customer, CustomerRegistration, Session, \
    SessionState
from .engine import SESSION_DURATION, SessionEngine
