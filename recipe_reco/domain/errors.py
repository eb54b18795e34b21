class NotFoundError(LookupError):
    """An identity supplied by the caller does not exist in storage."""

    entity = "entity"

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(f"{self.entity} not found: {identity}")


class UserNotFoundError(NotFoundError):
    entity = "User"


class RecipeNotFoundError(NotFoundError):
    entity = "Recipe"
