"""
Coffer manages an encrypted credentials file protected by a master key.

The credentials file holds AES-128-GCM encrypted text in the form
'ciphertext--iv--tag'. The 32 character hex master key is read from
$MASTER_KEY or from a 'master.key' file, which must never be committed.

Create a new key and credentials file in the current directory:

\b
    $ coffer init
    $ echo "master.key" >> .gitignore

Edit the credentials in your $EDITOR, re-encrypting them if they changed:

\b
    $ coffer edit credentials.yml.enc

Print the decrypted credentials:

\b
    $ MASTER_KEY="$(cat master.key)" coffer show credentials.yml.enc
"""

__author__ = 'Sam Clements'
__version__ = '1.0.0'

from .cipher import MessageCipher
from .editor import Editor
from .secrets import SecretFile

__all__ = ('MessageCipher', 'Editor', 'SecretFile')
