from fastapi import Header, HTTPException
from pydantic import ValidationError as PydanticValidationError
from supabase import create_client
import time
import logging

from app import config
from app.schemas.auth import Actor

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


def load_actor(supabase, user_id: str) -> Actor:
    """Build the acting user from their profile row (role + classroom)."""
    profile_res = supabase \
        .table(PROFILES_TABLE) \
        .select("id, role, classroom_id") \
        .eq("id", user_id) \
        .execute()

    if not profile_res.data:
        logger.warning(f"No profile found for user {user_id}")
        raise HTTPException(status_code=401, detail="User profile not found")

    try:
        return Actor.model_validate(profile_res.data[0])
    except PydanticValidationError as e:
        logger.warning(f"Profile for user {user_id} is not usable: {e}")
        raise HTTPException(status_code=401, detail="User role is not permitted")


async def user_supabase_client(authorization: str = Header(None)):
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid token format")

    token = authorization.split(" ", 1)[1]

    if not config.SUPABASE_URL or not config.SUPABASE_KEY:
        logger.error("Supabase URL or Key not found in environment variables")
        raise HTTPException(status_code=500, detail="Server configuration error")

    try:
        start_time = time.time()
        logger.info("Creating Supabase client")
        supabase = create_client(config.SUPABASE_URL, config.SUPABASE_KEY)

        logger.info("Validating token with Supabase")
        user_res = supabase.auth.get_user(token)
        end_time = time.time()
        logger.info(f"Token validation completed in {end_time - start_time:.2f} seconds")
    except Exception as e:
        logger.error(f"Supabase token validation error: {str(e)}")
        if "timed out" in str(e).lower():
            raise HTTPException(
                status_code=504,
                detail="Connection to authentication service timed out. Please try again later."
            )
        raise HTTPException(status_code=401, detail=f"Authentication error: {str(e)}")

    if not user_res or not user_res.user:
        logger.warning("User not found after successful token validation")
        raise HTTPException(status_code=401, detail="User not found")

    # Row level security evaluates the caller's JWT on every table query
    supabase.postgrest.auth(token)

    actor = load_actor(supabase, user_res.user.id)
    logger.info(f"Successfully authenticated user: {actor.id} as {actor.role.value}")
    return {
        "supabase": supabase,
        "user_id": actor.id,
        "user": user_res.user,
        "actor": actor,
    }
