from chefbot.extensions import db

# SQLite only autoincrements INTEGER PRIMARY KEY
BigInt = db.BigInteger().with_variant(db.Integer(), "sqlite")
