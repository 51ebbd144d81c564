from .app_enum import (
    RoleEnum,
    FoodCategoryEnum,
    OrderStatusEnum,
    PaymentMethodEnum,
    PaymentStatusEnum,
    MealTypeEnum,
    ExpenseCategoryEnum,
    SenderEnum,
    IntentEnum,
)
