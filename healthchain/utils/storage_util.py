# /healthchain/utils/storage_util.py
import os
import json
import logging
import tempfile

from werkzeug.utils import secure_filename

from healthchain.exceptions import StorageMissing

logger = logging.getLogger(__name__)

BLOB_SUFFIX = '.enc'


class BlobStorage:
    """Utility class for persisting encrypted record blobs on local disk."""

    def __init__(self, root=None):
        self.root = None
        if root:
            self.init_root(root)

    def init_root(self, root):
        """Creates the upload folder if needed."""
        os.makedirs(root, exist_ok=True)
        self.root = root

    @staticmethod
    def handle_for(record_id):
        """Derives the opaque blob handle for a record id."""
        return secure_filename(f"{record_id}{BLOB_SUFFIX}")

    def _path(self, handle):
        if self.root is None:
            raise RuntimeError("BlobStorage has not been initialized with a root folder.")
        return os.path.join(self.root, secure_filename(handle))

    def exists(self, handle):
        return os.path.exists(self._path(handle))

    def save(self, handle, iv, ciphertext):
        """
        Writes IV and ciphertext together as one blob.

        The write goes to a temporary file first and is moved into place, so
        a reader never sees a half-written blob.
        """
        path = self._path(handle)
        blob = {'iv': iv.hex(), 'data': ciphertext.hex()}

        fd, tmp_path = tempfile.mkstemp(dir=self.root, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(blob, f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        logger.debug(f"Stored blob {handle}")
        return handle

    def load(self, handle):
        """
        Reads a blob back.

        Returns:
            tuple: (iv, ciphertext) as bytes

        Raises StorageMissing if no blob exists for the handle and ValueError
        if the blob is not in the expected format.
        """
        path = self._path(handle)
        if not os.path.exists(path):
            raise StorageMissing()

        with open(path, 'r', encoding='utf-8') as f:
            blob = json.load(f)

        try:
            return bytes.fromhex(blob['iv']), bytes.fromhex(blob['data'])
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed blob {handle}: {e}")

    def delete(self, handle):
        path = self._path(handle)
        if os.path.exists(path):
            os.unlink(path)
            logger.info(f"Removed blob {handle}")
            return True
        return False
