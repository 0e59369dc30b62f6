from pydantic import BaseModel, constr


class OAuthTokenRequest(BaseModel):
    access_token: constr(strip_whitespace=True, min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: constr(min_length=1)
