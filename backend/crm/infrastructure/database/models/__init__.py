from .customer_models import CustomerModel, AddressModel, ContactModel
from .catalog_models import (
    ProductCategoryModel,
    ServiceCategoryModel,
    VendorModel,
    ProductModel,
    ServiceModel,
)
from .sales_models import LeadModel, OpportunityModel, SaleModel, RewardModel
from .support_models import SupportCaseModel, TodoTaskModel
from .identity_models import (
    UserModel,
    RoleModel,
    UserRoleModel,
    UserClaimModel,
    RoleClaimModel,
    UserLoginModel,
    UserTokenModel,
)

__all__ = [
    "CustomerModel",
    "AddressModel",
    "ContactModel",
    "ProductCategoryModel",
    "ServiceCategoryModel",
    "VendorModel",
    "ProductModel",
    "ServiceModel",
    "LeadModel",
    "OpportunityModel",
    "SaleModel",
    "RewardModel",
    "SupportCaseModel",
    "TodoTaskModel",
    "UserModel",
    "RoleModel",
    "UserRoleModel",
    "UserClaimModel",
    "RoleClaimModel",
    "UserLoginModel",
    "UserTokenModel",
]
