"""
Process hardening for a program that handles secrets
"""

import sys
import ctypes
import ctypes.util
from typing import Optional


PR_SET_NAME = 15
PR_SET_DUMPABLE = 4
PROCESS_NAME_MAX = 15


class ProcessSecurity:
    """Linux prctl wrappers; every call is a no-op elsewhere"""
    
    _libc: Optional[ctypes.CDLL] = None
    
    @classmethod
    def _get_libc(cls) -> Optional[ctypes.CDLL]:
        """Get libc handle"""
        if cls._libc is None:
            libc_path = ctypes.util.find_library('c')
            if libc_path:
                try:
                    cls._libc = ctypes.CDLL(libc_path, use_errno=True)
                except OSError:
                    cls._libc = None
        return cls._libc
    
    @classmethod
    def _prctl(cls, option: int, arg) -> bool:
        if not sys.platform.startswith('linux'):
            return False
        
        libc = cls._get_libc()
        if not libc:
            return False
        
        try:
            return libc.prctl(option, arg, 0, 0, 0) == 0
        except (AttributeError, ctypes.ArgumentError):
            return False
    
    @classmethod
    def disable_core_dumps(cls) -> bool:
        """
        Mark the process non-dumpable
        
        This keeps typed secrets out of core files and stops unprivileged
        processes from attaching with ptrace.
        
        Returns:
            True if successful
        """
        return cls._prctl(PR_SET_DUMPABLE, 0)
    
    @classmethod
    def set_process_name(cls, name: str) -> bool:
        """
        Set the kernel-visible process name
        
        Args:
            name: New process name, truncated to 15 bytes
        
        Returns:
            True if successful
        """
        name_bytes = name.encode('utf-8')[:PROCESS_NAME_MAX]
        return cls._prctl(PR_SET_NAME, name_bytes)
