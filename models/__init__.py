from models.post import Post
from models.post_meta import PostMeta
