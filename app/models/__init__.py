from app.models.customers import Customer, PaymentMethod
from app.models.staff import Staff
