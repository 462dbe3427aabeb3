from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import select
from airsense.models.account_model import Account


def get_account_by_email(db: Session, email: str) -> Account | None:
    stmt = select(Account).where(Account.email.ilike(email))
    return db.execute(stmt).scalars().first()


def get_account_by_id(db: Session, account_id: int) -> Account | None:
    stmt = select(Account).where(Account.account_id == account_id)
    return db.execute(stmt).scalars().first()


def create_account(db: Session, name: str, email: str, password_hash: str) -> Account:
    account = Account(
        name=name,
        email=email.lower(),
        password_hash=password_hash,
        is_active=True,
        last_login=datetime.now(timezone.utc),
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def touch_last_login(db: Session, account: Account) -> Account:
    account.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(account)
    return account


def delete_account(db: Session, account: Account) -> None:
    db.delete(account)
    db.commit()
