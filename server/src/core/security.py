from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


async def hash_codeword(codeword: str) -> str:
    return await run_in_threadpool(pwd_context.hash, codeword)


async def verify_codeword(codeword: str, codeword_hash: str) -> bool:
    return await run_in_threadpool(pwd_context.verify, codeword, codeword_hash)
