from pydantic import BaseModel


class SecretConfig(BaseModel):
    # NationStates requires every client to identify its user nation
    user_nation: str = ''
