from fastapi import APIRouter
from . import auth, users, members, activities, lists, relations, historic

router = APIRouter(prefix="/v1")

router.include_router(users.router, prefix="/user", tags=["Users"])
router.include_router(auth.router, prefix="/auth", tags=["Auth"])
router.include_router(members.router, prefix="/member", tags=["Members"])
router.include_router(activities.router, prefix="/activity", tags=["Activity"])
router.include_router(lists.router, prefix="/list", tags=["List"])
router.include_router(relations.router, prefix="/relation", tags=["List Activity"])
router.include_router(historic.router, prefix="/historic", tags=["List History"])
